# Interfaces (Abstract Contracts)
# Adapters implement these interfaces
from .repositories import (
    CommentRepository,
    InvitationRepository,
    ProjectRepository,
    TaskRepository,
    UnitOfWork,
    UserRepository,
)
from .services import EmailService

__all__ = [
    "UnitOfWork",
    "UserRepository",
    "TaskRepository",
    "ProjectRepository",
    "CommentRepository",
    "InvitationRepository",
    "EmailService",
]
