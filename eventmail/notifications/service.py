"""Mail delivery for prepared event announcements.

MailService takes the output of text preparation, validates the sender and
recipients, and either prints a dry-run preview or sends the message over
SMTP with the credentials from the profile.
"""

import logging
import sys
from email.message import EmailMessage
from typing import List, Optional, TextIO

from eventmail.logging import get_logger
from eventmail.preparation.preparer import PreparedText

from .models import DeliveryResult, MailConfigurationError
from .smtp_client import SMTPClient, parse_mailbox, parse_recipients

logger = get_logger(__name__, component="notification")


class MailService:
    """Builds and delivers the announcement message.

    Flow:
    1. Validate 'from' and 'to'
    2. On dry run, print the message (without credentials) and stop
    3. Check 'user', 'password' and 'server'
    4. Build the EmailMessage and send it through SMTPClient
    """

    def __init__(
        self,
        smtp_client: Optional[SMTPClient] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.smtp_client = smtp_client or SMTPClient()
        self.logger = logger_instance or logger

    def deliver(
        self,
        prepared: PreparedText,
        dry_run: bool = False,
        out: Optional[TextIO] = None,
    ) -> DeliveryResult:
        """Send the prepared message, or print it when dry_run is set.

        Args:
            prepared: Expanded text and remaining profile
            dry_run: Print the message instead of sending it
            out: Stream for the dry-run preview (stdout if None)

        Returns:
            DeliveryResult describing what was done

        Raises:
            MailConfigurationError: If a required setting is missing or invalid
            SMTPDeliveryError: If the SMTP server rejects the message
        """
        profile = prepared.profile

        if profile.from_ is None:
            raise MailConfigurationError("From must be set")
        sender = parse_mailbox(profile.from_, "from")

        if profile.to is None:
            raise MailConfigurationError("Addresses 'to' must be set")
        recipients = parse_recipients(profile.to)

        if dry_run:
            self._write_preview(out or sys.stdout, profile.from_, recipients, prepared)
            self.logger.info(
                "Dry run, message not sent",
                extra={"event": "notification.dry_run", "recipient_count": len(recipients)},
            )
            return DeliveryResult(
                status="dry_run",
                sender=sender,
                recipients=recipients,
                subject=prepared.subject,
            )

        if profile.user is None:
            raise MailConfigurationError("A 'user' string must be set in profile.")
        if profile.password is None:
            raise MailConfigurationError("A 'password' string must be set in profile.")
        if profile.server is None:
            raise MailConfigurationError("A 'server' string must be set in profile.")

        message = build_message(sender, recipients, prepared.body, prepared.subject)

        self.smtp_client.send(
            message,
            server=profile.server,
            user=profile.user,
            password=profile.password,
            port=profile.port,
        )

        self.logger.info(
            f"Email sent to {', '.join(recipients)}",
            extra={
                "event": "notification.send.success",
                "recipients": recipients,
                "server": profile.server,
            },
        )
        return DeliveryResult(
            status="sent",
            sender=sender,
            recipients=recipients,
            subject=prepared.subject,
        )

    @staticmethod
    def _write_preview(
        out: TextIO, sender: str, recipients: List[str], prepared: PreparedText
    ) -> None:
        out.write(f"From: {sender}\n")
        out.write(f"To: {', '.join(recipients)}\n")
        if prepared.subject is not None:
            out.write(f"Subject: {prepared.subject}\n")
        out.write(f"Body:\n{prepared.body}\n")


def build_message(
    sender: str, recipients: List[str], body: str, subject: Optional[str] = None
) -> EmailMessage:
    """Build a plain-text EmailMessage; no Subject header when subject is None."""
    message = EmailMessage()
    if subject is not None:
        # Header values must be a single line
        message["Subject"] = " ".join(subject.splitlines())
    message["From"] = sender
    message["To"] = ", ".join(recipients)
    message.set_content(body)
    return message
