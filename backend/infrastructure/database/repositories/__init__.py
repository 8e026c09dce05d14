"""
SQLAlchemy implementations of the repository interfaces.
"""

from .comments import SqlAlchemyCommentRepository
from .invitations import SqlAlchemyInvitationRepository
from .projects import SqlAlchemyProjectRepository
from .tasks import SqlAlchemyTaskRepository
from .unit_of_work import SqlAlchemyUnitOfWork
from .users import SqlAlchemyUserRepository

__all__ = [
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUserRepository",
    "SqlAlchemyTaskRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyCommentRepository",
    "SqlAlchemyInvitationRepository",
]
