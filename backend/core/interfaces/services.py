"""Service interfaces for external integrations."""

from abc import ABC, abstractmethod


class EmailService(ABC):
    """Abstract service for outbound email."""

    @abstractmethod
    async def send_project_invitation_email(
        self,
        to_email: str,
        inviter_name: str,
        project_name: str,
        role: str,
        invitation_url: str,
        message: str | None = None,
    ) -> bool:
        """Send an invitation email. Returns False on delivery failure."""
        ...
