"""Text preparation: turns a resolved profile into the final subject and body.

Steps, in order:
1. Take the body (and subject) templates
2. Parse date_spec and compute the next date for that weekday
3. Look up the event record for that date, or use the date alone
4. Expand the templates with the resulting values
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional

from eventmail.config.models import Profile, TextMode
from eventmail.logging import get_logger

from .dates import next_weekday_date, parse_weekday
from .exceptions import MissingRequiredFieldError
from .records import DATE_GROUP, find_record
from .templates import TemplateExpander

logger = get_logger(__name__, component="preparation")

# Fields used up by preparation; the rest is left for mail delivery.
CONSUMED_FIELDS = ("body", "subject", "date_spec", "event_file", "format")


@dataclass
class PreparedText:
    """Expanded message text plus the profile fields still needed for delivery.

    Attributes:
        profile: Resolved profile without the fields consumed by preparation
        body: Expanded body
        subject: Expanded subject, None in body_only mode
        date: Target date in ISO form
        values: Template values the text was expanded with
    """

    profile: Profile
    body: str
    subject: Optional[str]
    date: str
    values: Dict[str, str] = field(default_factory=dict)

    @property
    def mode(self) -> TextMode:
        return self.profile.text_mode


def prepare_text(
    profile: Profile,
    today: Optional[date] = None,
    expander: Optional[TemplateExpander] = None,
) -> PreparedText:
    """Expand the subject and body templates of a fully inherited profile.

    Args:
        profile: Profile with inheritance already resolved
        today: Reference date for the weekday calculation (local date if None)
        expander: Template expander (shared default if None)

    Returns:
        PreparedText with the expanded text and the remaining profile

    Raises:
        MissingRequiredFieldError: If body, subject, date_spec or format is needed but unset
        UnparsableWeekdayError: If date_spec names no weekday
        PatternError, DataFileError, NoMatchError: From the event file lookup
        TemplateExpansionError: If a template is malformed
    """
    expander = expander or TemplateExpander()
    mode = profile.text_mode

    body_template = profile.body
    if body_template is None:
        raise MissingRequiredFieldError("body", "No body template for message.")

    subject_template = None
    if mode is TextMode.SUBJECT_BODY:
        subject_template = profile.subject
        if subject_template is None:
            raise MissingRequiredFieldError("subject", "No subject template for message.")

    if profile.date_spec is None:
        raise MissingRequiredFieldError("date_spec", "No date_spec defined in profile.")
    weekday = parse_weekday(profile.date_spec)
    target_date = next_weekday_date(weekday, today)

    logger.info(
        f"Target date is {target_date}",
        extra={"event": "preparation.date.computed", "weekday": weekday.name.title()},
    )

    if profile.event_file is not None:
        if profile.format is None:
            raise MissingRequiredFieldError(
                "format", "Event file set, but no format defined"
            )
        values = find_record(profile.event_file, profile.format, target_date)
    else:
        values = {DATE_GROUP: target_date}

    body = expander.expand(body_template, values)
    subject = expander.expand(subject_template, values) if subject_template is not None else None

    remaining = profile.model_copy(update={name: None for name in CONSUMED_FIELDS})

    return PreparedText(
        profile=remaining,
        body=body,
        subject=subject,
        date=target_date,
        values=values,
    )
