"""Record interactions and reschedule the next reminder for a contact."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time

from dateutil.relativedelta import relativedelta
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.core.errors import InvalidInteractionError
from reconnect.models import Contact, ContactLog
from reconnect.models.base import to_naive_utc
from reconnect.services.metrics import refresh_contact_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InteractionEntry:
    """A new interaction to log against a contact.

    ``reset_reminder`` only steers this write and is never stored on the log.
    """

    contact_date: datetime
    contact_type: str
    notes: str | None = None
    got_response: bool = False
    response_date: datetime | None = None
    reminder_frequency_override: int | None = None
    reset_reminder: bool = True


def add_months(value: datetime, months: int) -> datetime:
    """Add calendar months, clamping to the last valid day of the target month."""

    return value + relativedelta(months=months)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _as_datetime(value: object, field: str) -> datetime:
    if isinstance(value, datetime):
        return to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time())
    raise InvalidInteractionError(f"{field} must be a valid date", field=field)


def _validate(
    contact: Contact, entry: InteractionEntry
) -> tuple[datetime, datetime | None, int]:
    """Return the normalised contact and response dates and the effective frequency.

    Raises before anything is mutated.
    """

    contact_date = _as_datetime(entry.contact_date, "contact_date")
    response_date = (
        _as_datetime(entry.response_date, "response_date")
        if entry.response_date is not None
        else None
    )
    if not entry.contact_type or not entry.contact_type.strip():
        raise InvalidInteractionError("contact_type is required", field="contact_type")

    effective = (
        entry.reminder_frequency_override
        if entry.reminder_frequency_override is not None
        else contact.reminder_frequency_months
    )
    if not _is_positive_int(effective):
        raise InvalidInteractionError(
            "Reminder frequency must be a positive number of months",
            field="reminder_frequency_months",
        )
    return contact_date, response_date, effective


async def record_interaction(
    session: AsyncSession,
    contact: Contact,
    entry: InteractionEntry,
    *,
    now: datetime | None = None,
    clamp_score: bool = True,
) -> tuple[Contact, ContactLog]:
    """Persist ``entry`` and bring the contact's schedule and metrics up to date.

    The log insert, the contact update and the metric recomputation are
    flushed in the caller's session; committing is left to the caller so the
    three land in a single transaction.
    """

    contact_date, response_date, effective_frequency = _validate(contact, entry)

    log = ContactLog(
        contact_id=contact.id,
        contact_date=contact_date,
        contact_type=entry.contact_type.strip(),
        notes=entry.notes,
        got_response=entry.got_response,
        response_date=response_date,
    )
    session.add(log)

    contact.last_contact_date = contact_date
    if entry.got_response:
        contact.last_response_date = contact_date
    if entry.reset_reminder:
        contact.next_contact_date = add_months(contact_date, effective_frequency)
        contact.reminder_frequency_months = effective_frequency

    await session.flush()
    await refresh_contact_metrics(session, contact, now=now, clamp=clamp_score)

    logger.info(
        "Recorded interaction",
        extra={
            "contact_id": contact.id,
            "log_id": log.id,
            "reset_reminder": entry.reset_reminder,
            "next_contact_date": contact.next_contact_date,
        },
    )
    return contact, log
