"""Relationship health metrics derived from a contact's interaction history.

The derived fields on :class:`~reconnect.models.Contact` behave as a cache of
:func:`compute_relationship_metrics`: they are recomputed from the full log
history on every log write and never patched incrementally.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.core.errors import ConsistencyError
from reconnect.models import Contact, ContactLog, ContactTrend
from reconnect.models.base import utcnow
from reconnect.services.hydration import load_contact_logs

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30
SECONDS_PER_DAY = 86_400

RESPONSE_WEIGHT = 40
RECENCY_WEIGHT = 30
ADHERENCE_WEIGHT = 30
NEW_CONTACT_ADHERENCE = 15
MIN_LOGS_FOR_TREND = 3

MIN_SCORE = 0
MAX_SCORE = 100


class LogLike(Protocol):
    contact_date: datetime
    got_response: bool


@dataclass(frozen=True)
class RelationshipMetrics:
    """Derived relationship state for one contact."""

    relationship_score: int
    contact_frequency_days: int
    contact_trend: ContactTrend


def round_half_up(value: float) -> int:
    """Round halves towards positive infinity, unlike the builtin banker's rounding."""

    return math.floor(value + 0.5)


def day_gap(earlier: datetime, later: datetime) -> int:
    return round_half_up((later - earlier).total_seconds() / SECONDS_PER_DAY)


def cadence_days(reminder_frequency_months: int) -> int:
    """Express a reminder cadence in days."""

    return reminder_frequency_months * DAYS_PER_MONTH


def contact_gaps(logs: Sequence[LogLike]) -> list[int]:
    """Return the day gaps between consecutive logs in chronological order."""

    ordered = sorted(log.contact_date for log in logs)
    return [day_gap(earlier, later) for earlier, later in zip(ordered, ordered[1:])]


def contact_frequency(logs: Sequence[LogLike], reminder_frequency_months: int) -> int:
    """Average number of days between interactions.

    A single log has no gap to measure, so the configured cadence stands in.
    """

    gaps = contact_gaps(logs)
    if not gaps:
        return cadence_days(reminder_frequency_months)
    return round_half_up(sum(gaps) / len(gaps))


def contact_trend(logs: Sequence[LogLike]) -> ContactTrend:
    """Compare the two latest gaps against the mean gap."""

    if len(logs) < MIN_LOGS_FOR_TREND:
        return ContactTrend.STABLE

    gaps = contact_gaps(logs)
    mean_gap = sum(gaps) / len(gaps)
    previous, latest = gaps[-2:]
    if previous < mean_gap and latest < mean_gap:
        return ContactTrend.INCREASING
    if previous > mean_gap and latest > mean_gap:
        return ContactTrend.DECREASING
    return ContactTrend.STABLE


def response_component(logs: Sequence[LogLike]) -> float:
    responded = sum(1 for log in logs if log.got_response)
    return responded / len(logs) * RESPONSE_WEIGHT


def recency_component(last_contact_date: datetime | None, now: datetime) -> float:
    if last_contact_date is None:
        return 0
    # Calendar days; a future-dated contact counts as same-day.
    days_since = max(0, (now.date() - last_contact_date.date()).days)
    return max(0, RECENCY_WEIGHT - min(RECENCY_WEIGHT, days_since))


def adherence_component(
    log_count: int, frequency_days: int, reminder_frequency_months: int
) -> float:
    if log_count < 2:
        return NEW_CONTACT_ADHERENCE
    ratio = frequency_days / cadence_days(reminder_frequency_months)
    if ratio > 1:
        return ADHERENCE_WEIGHT / ratio
    return ADHERENCE_WEIGHT * ratio


def compute_relationship_metrics(
    logs: Sequence[LogLike],
    *,
    reminder_frequency_months: int,
    last_contact_date: datetime | None,
    now: datetime,
    clamp: bool = True,
) -> RelationshipMetrics | None:
    """Derive score, frequency and trend from the full interaction history.

    Returns ``None`` for an empty history so callers keep the stored defaults.
    """

    if not logs:
        return None

    frequency_days = contact_frequency(logs, reminder_frequency_months)
    raw_score = (
        response_component(logs)
        + recency_component(last_contact_date, now)
        + adherence_component(len(logs), frequency_days, reminder_frequency_months)
    )
    score = round_half_up(raw_score)
    if clamp:
        score = min(MAX_SCORE, max(MIN_SCORE, score))

    return RelationshipMetrics(
        relationship_score=score,
        contact_frequency_days=frequency_days,
        contact_trend=contact_trend(logs),
    )


def recompute_contact_metrics(
    contact: Contact,
    logs: Sequence[ContactLog],
    *,
    now: datetime | None = None,
    clamp: bool = True,
) -> RelationshipMetrics | None:
    """Recompute and apply the derived fields of ``contact`` from ``logs``."""

    foreign = [log.id for log in logs if log.contact_id != contact.id]
    if foreign:
        raise ConsistencyError(
            f"Logs {foreign} do not belong to contact {contact.id}"
        )

    metrics = compute_relationship_metrics(
        logs,
        reminder_frequency_months=contact.reminder_frequency_months,
        last_contact_date=contact.last_contact_date,
        now=now or utcnow(),
        clamp=clamp,
    )
    if metrics is None:
        return None

    # All three fields are written together.
    contact.relationship_score = metrics.relationship_score
    contact.contact_frequency_days = metrics.contact_frequency_days
    contact.contact_trend = metrics.contact_trend
    contact.updated_at = utcnow()

    logger.info(
        "Recomputed relationship metrics",
        extra={
            "contact_id": contact.id,
            "log_count": len(logs),
            "relationship_score": metrics.relationship_score,
            "contact_frequency_days": metrics.contact_frequency_days,
            "contact_trend": metrics.contact_trend.value,
        },
    )
    return metrics


async def refresh_contact_metrics(
    session: AsyncSession,
    contact: Contact,
    *,
    now: datetime | None = None,
    clamp: bool = True,
) -> RelationshipMetrics | None:
    """Load the contact's full log history and recompute its derived fields."""

    logs = await load_contact_logs(session, contact.id)
    metrics = recompute_contact_metrics(contact, logs, now=now, clamp=clamp)
    await session.flush()
    return metrics
