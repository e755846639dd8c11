"""Mail delivery for prepared announcements.

- MailService: validates addresses, prints dry runs, sends messages
- SMTPClient: smtplib wrapper with implicit TLS / STARTTLS
- DeliveryResult: outcome of a delivery request
"""

from .models import (
    DeliveryResult,
    MailConfigurationError,
    NotificationError,
    SMTPDeliveryError,
)
from .service import MailService, build_message
from .smtp_client import SMTPClient, parse_mailbox, parse_recipients

__all__ = [
    # Main service
    "MailService",
    # Models and results
    "DeliveryResult",
    # Exceptions
    "NotificationError",
    "MailConfigurationError",
    "SMTPDeliveryError",
    # Components
    "SMTPClient",
    # Utilities
    "build_message",
    "parse_mailbox",
    "parse_recipients",
]
