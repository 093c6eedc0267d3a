"""
Error notification by mail.
"""

from __future__ import annotations

import smtplib
import socket
from email.message import EmailMessage

from sqlexport.config.profile import NotificationSettings
from sqlexport.exceptions import NotificationError
from sqlexport.utils.logging import get_logger

logger = get_logger("sqlexport.notify")


class EmailNotifier:
    """Sends a plain-text mail summarising a failed export."""

    def __init__(self, settings: NotificationSettings):
        self.settings = settings

    @property
    def enabled(self) -> bool:
        return self.settings.enabled and bool(self.settings.recipients)

    def build_message(self, subject: str, body: str) -> EmailMessage:
        settings = self.settings
        msg = EmailMessage()
        msg["Subject"] = f"{settings.subject_prefix} {subject}".strip()
        msg["From"] = settings.sender or settings.username or f"sqlexport@{socket.gethostname()}"
        msg["To"] = ", ".join(settings.recipients)
        msg.set_content(body)
        return msg

    def send(self, subject: str, body: str) -> None:
        """
        Deliver a notification.

        Raises:
            NotificationError: If the SMTP exchange fails
        """
        settings = self.settings
        msg = self.build_message(subject, body)
        try:
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.timeout) as server:
                if settings.use_tls:
                    server.starttls()
                if settings.username:
                    server.login(settings.username, settings.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Failed to send notification via {settings.smtp_host}: {e}") from e

        logger.info(f"Error notification sent to {msg['To']}")

    def notify_failure(self, profile_name: str, error: BaseException) -> bool:
        """
        Send a failure summary if notifications are enabled.

        Delivery problems are logged, never raised.

        Returns:
            True if a mail was sent
        """
        if not self.enabled:
            return False

        body = (
            f"Export for profile '{profile_name}' failed.\n\n"
            f"Error: {type(error).__name__}: {error}\n"
        )
        cause = error.__cause__
        if cause is not None:
            body += f"Details: {cause}\n"

        try:
            self.send(f"Export failed: {profile_name}", body)
        except NotificationError as e:
            logger.error(str(e))
            return False
        return True
