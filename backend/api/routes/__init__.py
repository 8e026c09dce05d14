"""API Routes."""

from fastapi import APIRouter

from .comments import router as comments_router
from .health import router as health_router
from .project_invitations import router as project_invitations_router
from .projects import router as projects_router
from .tasks import router as tasks_router
from .users import router as users_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(users_router)
api_router.include_router(projects_router)
api_router.include_router(tasks_router)
api_router.include_router(comments_router)
api_router.include_router(project_invitations_router)
