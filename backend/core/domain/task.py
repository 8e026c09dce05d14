"""Task domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import uuid4

from ..timeutil import utcnow


class TaskStatus(StrEnum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


@dataclass
class Task:
    """Task domain entity; comments hang off tasks."""

    project_id: str
    title: str
    id: str = field(default_factory=lambda: str(uuid4()))
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    created_by: str | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if isinstance(self.status, str):
            self.status = TaskStatus(self.status)
