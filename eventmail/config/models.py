"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class TextMode(str, Enum):
    """Which parts of the message are templated and sent.

    SUBJECT_BODY expands and sends both subject and body. BODY_ONLY sends a
    message without a Subject header and never requires a subject template.
    """

    SUBJECT_BODY = "subject_body"
    BODY_ONLY = "body_only"


class Profile(BaseModel):
    """A named, partially specified mail campaign.

    Every field is optional because any of them may be supplied by an
    inherited profile. A profile needs 'doc' to be selectable from the
    command line and to show up in --list.
    """

    # Fields copied from a parent when unset on the child. 'doc' and
    # 'inherit' are handled separately by the inheritance resolver.
    MERGEABLE_FIELDS: ClassVar[Tuple[str, ...]] = (
        "date_spec",
        "event_file",
        "format",
        "server",
        "port",
        "user",
        "password",
        "from_",
        "to",
        "subject",
        "body",
        "mode",
    )

    date_spec: Optional[str] = Field(None, description="Weekday name, e.g. 'Friday' or 'fri'")
    event_file: Optional[str] = Field(None, description="Path of the event data file")
    format: Optional[str] = Field(
        None, description="Regular expression with a named 'date' group"
    )
    server: Optional[str] = Field(None, min_length=1, description="SMTP relay host")
    port: Optional[int] = Field(None, ge=1, le=65535, description="SMTP port")
    user: Optional[str] = Field(None, description="SMTP user name")
    password: Optional[str] = Field(None, description="SMTP password")
    from_: Optional[str] = Field(None, alias="from", description="Sender mailbox")
    to: Optional[List[str]] = Field(None, description="Recipient mailboxes")
    subject: Optional[str] = Field(None, description="Subject template")
    body: Optional[str] = Field(None, description="Body template")
    mode: Optional[TextMode] = Field(None, description="subject_body (default) or body_only")
    doc: Optional[str] = Field(None, description="Description shown by --list")
    inherit: Optional[str] = Field(None, description="Name of the parent profile")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("inherit")
    @classmethod
    def empty_inherit_is_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty or whitespace-only parent name as no parent."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @field_validator("to", mode="before")
    @classmethod
    def single_recipient_to_list(cls, v):
        """Accept a single address string as a one-element recipient list."""
        if isinstance(v, str):
            return [v]
        return v

    @property
    def text_mode(self) -> TextMode:
        """Effective text mode; SUBJECT_BODY when not configured."""
        return self.mode or TextMode.SUBJECT_BODY
