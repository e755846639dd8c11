"""SMTP client wrapper for email delivery.

A thin wrapper around smtplib with implicit TLS or STARTTLS, login and
connection cleanup, plus mailbox parsing for the From and To headers.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr, parseaddr
from typing import Callable, Iterable, List, Optional

from email_validator import EmailNotValidError, validate_email

from .models import MailConfigurationError, SMTPDeliveryError

logger = logging.getLogger(__name__)

# Submission port with implicit TLS, used when a profile sets no port.
DEFAULT_SMTP_PORT = 465


class SMTPClient:
    """Wrapper around smtplib for sending email messages.

    Port 465 connects with implicit TLS; any other port connects in plain
    text and upgrades with STARTTLS before logging in.
    """

    def __init__(
        self,
        smtp_factory: Optional[Callable] = None,
        smtp_ssl_factory: Optional[Callable] = None,
    ):
        """Initialize SMTP client with optional factory injection.

        Args:
            smtp_factory: Factory for SMTP instances (for mocking)
            smtp_ssl_factory: Factory for SMTP_SSL instances (for mocking)
        """
        self.smtp_factory = smtp_factory or smtplib.SMTP
        self.smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL

    def send(
        self,
        message: EmailMessage,
        server: str,
        user: str,
        password: str,
        port: Optional[int] = None,
    ) -> None:
        """Send an email message via SMTP.

        Args:
            message: Fully constructed EmailMessage to send
            server: SMTP relay host
            user: Login user name
            password: Login password
            port: SMTP port (DEFAULT_SMTP_PORT if None)

        Raises:
            SMTPDeliveryError: If message delivery fails
        """
        port = port or DEFAULT_SMTP_PORT
        smtp = None
        try:
            context = ssl.create_default_context()
            if port == DEFAULT_SMTP_PORT:
                logger.debug(f"Connecting to {server}:{port} with implicit TLS")
                smtp = self.smtp_ssl_factory(server, port, context=context)
            else:
                logger.debug(f"Connecting to {server}:{port}")
                smtp = self.smtp_factory(server, port)
                logger.debug("Upgrading connection with STARTTLS")
                smtp.starttls(context=context)

            logger.debug(f"Authenticating as {user}")
            smtp.login(user, password)

            smtp.send_message(message)
            logger.debug(f"Message sent successfully to {message['To']}")

        except smtplib.SMTPException as e:
            error_msg = f"SMTP error during message delivery: {e}"
            logger.error(error_msg)
            raise SMTPDeliveryError(error_msg) from e
        except OSError as e:
            error_msg = f"Network error during SMTP connection: {e}"
            logger.error(error_msg)
            raise SMTPDeliveryError(error_msg) from e
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except (smtplib.SMTPException, OSError) as e:
                    logger.warning(f"Error closing SMTP connection: {e}")


def parse_mailbox(value: str, field_name: str) -> str:
    """Validate a mailbox such as 'Events <events@example.com>' or 'a@example.com'.

    Args:
        value: Mailbox string from the profile
        field_name: Profile field the value came from, used in error messages

    Returns:
        Normalized mailbox, keeping the display name if one was given

    Raises:
        MailConfigurationError: If the address is invalid
    """
    display_name, address = parseaddr(value)
    if not address:
        raise MailConfigurationError(f"Address error for '{field_name}' -- {value} -- empty address")

    try:
        validated = validate_email(address, check_deliverability=False)
    except EmailNotValidError as e:
        raise MailConfigurationError(
            f"Address error for '{field_name}' -- {value} -- {e}"
        ) from e

    return formataddr((display_name, validated.normalized))


def parse_recipients(recipients: Iterable[str]) -> List[str]:
    """Validate every recipient mailbox, keeping their order.

    Raises:
        MailConfigurationError: If any address is invalid or none is given
    """
    mailboxes = [parse_mailbox(recipient, "to") for recipient in recipients]
    if not mailboxes:
        raise MailConfigurationError("Addresses 'to' must be set")
    return mailboxes
