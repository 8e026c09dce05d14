"""
Resend email service adapter.
"""

import asyncio
import logging
from html import escape
from typing import Optional

import resend

from core.interfaces.services import EmailService
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)


class ResendEmailService(EmailService):
    """Email service using Resend API."""

    def __init__(self, api_key: Optional[str] = None, from_email: Optional[str] = None):
        self._api_key = settings.resend_api_key if api_key is None else api_key
        if self._api_key:
            resend.api_key = self._api_key
        self._from_email = from_email or settings.resend_from_email

    async def send_project_invitation_email(
        self,
        to_email: str,
        inviter_name: str,
        project_name: str,
        role: str,
        invitation_url: str,
        message: Optional[str] = None,
    ) -> bool:
        """
        Send project invitation email.

        Args:
            to_email: Recipient email address
            inviter_name: Name of the person who sent the invitation
            project_name: Name of the project
            role: Role the user will have in the project
            invitation_url: URL to accept the invitation
            message: Optional personal note from the inviter

        Returns:
            True if sent successfully, False otherwise
        """
        if not self._api_key:
            logger.info("[DEV] Project invitation email for %s: %s", to_email, invitation_url)
            return True

        try:
            await asyncio.to_thread(
                resend.Emails.send,
                {
                    "from": self._from_email,
                    "to": to_email,
                    "subject": f"You've been invited to join {project_name} on TaskFlow",
                    "html": self._get_project_invitation_email_html(
                        inviter_name, project_name, role, invitation_url, message
                    ),
                },
            )
            return True
        except Exception as e:
            logger.error("Failed to send project invitation email to %s: %s", to_email, e)
            return False

    def _get_project_invitation_email_html(
        self,
        inviter_name: str,
        project_name: str,
        role: str,
        invitation_url: str,
        message: Optional[str] = None,
    ) -> str:
        """Generate project invitation email HTML."""
        note = ""
        if message:
            note = f"""
                <blockquote style="border-left: 3px solid #4F7CAC; margin: 0 0 24px; padding: 8px 16px; color: #4A4A68;">
                    {escape(message)}
                </blockquote>"""

        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <meta name="viewport" content="width=device-width, initial-scale=1.0">
        </head>
        <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; background-color: #F5F7FA; padding: 40px 20px;">
            <div style="max-width: 560px; margin: 0 auto; background: white; border-radius: 12px; padding: 40px;">
                <h1 style="color: #1A1A2E; font-size: 22px; margin: 0 0 24px;">TaskFlow</h1>

                <h2 style="color: #1A1A2E; font-size: 18px; margin-bottom: 16px;">You've been invited to a project</h2>

                <p style="color: #4A4A68; line-height: 1.6; margin-bottom: 24px;">
                    {escape(inviter_name)} has invited you to join <strong>{escape(project_name)}</strong>
                    as <strong>{escape(role.title())}</strong>.
                </p>
                {note}
                <div style="text-align: center; margin: 32px 0;">
                    <a href="{invitation_url}" style="display: inline-block; background: #4F7CAC; color: white; text-decoration: none; padding: 12px 28px; border-radius: 8px;">
                        View invitation
                    </a>
                </div>

                <p style="color: #8B8BA7; font-size: 12px; text-align: center;">
                    If you weren't expecting this invitation, you can ignore this email.
                </p>
            </div>
        </body>
        </html>
        """


# Singleton instance
email_service = ResendEmailService()
