"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from ..timeutil import utcnow


@dataclass
class User:
    """User domain entity - core business object."""

    email: str
    name: str
    id: str = field(default_factory=lambda: str(uuid4()))
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        self.email = self.email.strip().lower()
