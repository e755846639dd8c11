"""Data models and exceptions for mail delivery."""

from dataclasses import dataclass, field
from typing import List, Optional


class NotificationError(Exception):
    """Base exception for mail delivery errors."""

    pass


class MailConfigurationError(NotificationError):
    """Raised when a profile lacks a setting needed to build or send the message."""

    pass


class SMTPDeliveryError(NotificationError):
    """Raised when the SMTP server rejects the message or can not be reached."""

    pass


@dataclass
class DeliveryResult:
    """Outcome of a delivery request.

    Attributes:
        status: "sent" or "dry_run"
        sender: Formatted From address
        recipients: Formatted To addresses
        subject: Subject line, None when the message carries no subject
    """

    status: str  # "sent", "dry_run"
    sender: str
    recipients: List[str] = field(default_factory=list)
    subject: Optional[str] = None

    def is_success(self) -> bool:
        return self.status == "sent"
