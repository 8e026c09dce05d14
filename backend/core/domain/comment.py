"""Comment domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from ..exceptions import BadRequestError
from ..timeutil import utcnow

DEFAULT_MAX_CONTENT_LENGTH = 2000


def normalize_content(content: str | None, max_length: int = DEFAULT_MAX_CONTENT_LENGTH) -> str:
    """Strip comment text and enforce the non-empty / max-length rules."""
    text = (content or "").strip()
    if not text:
        raise BadRequestError("Comment content cannot be empty")
    if len(text) > max_length:
        raise BadRequestError(f"Comment content must not exceed {max_length} characters")
    return text


@dataclass
class Comment:
    """A comment on a task, optionally replying to another comment of the same task."""

    task_id: str
    user_id: str
    content: str
    id: str = field(default_factory=lambda: str(uuid4()))
    parent_id: str | None = None
    is_deleted: bool = False
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # Read-side fields, filled by the repository / thread builder
    author_name: str | None = None
    replies: list["Comment"] = field(default_factory=list, compare=False, repr=False)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    def can_be_edited_by(self, user_id: str) -> bool:
        return self.user_id == user_id and not self.is_deleted

    def can_be_deleted_by(self, user_id: str) -> bool:
        return self.user_id == user_id and not self.is_deleted

    def update_content(self, content: str, max_length: int = DEFAULT_MAX_CONTENT_LENGTH) -> None:
        self.content = normalize_content(content, max_length)
        self.updated_at = utcnow()

    def mark_as_deleted(self, placeholder: str) -> None:
        """Soft delete: keep the row so replies stay attached, hide the text."""
        self.is_deleted = True
        self.content = placeholder
        self.updated_at = utcnow()

    def display_content(self, placeholder: str) -> str:
        return placeholder if self.is_deleted else self.content
