"""Reminder API routes.

Delivery is handled elsewhere; these endpoints only expose what is due.
"""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.api.deps import get_owner_id
from reconnect.api.v1.common import data_response, serialize_contact
from reconnect.core.db import get_session
from reconnect.models.base import utcnow
from reconnect.schemas import ContactRead, ReminderStatusRead
from reconnect.services.dashboard import filter_overdue, get_due_contacts, summarize_reminders

router = APIRouter(prefix="/reminders", tags=["reminders"])


@router.get("/status")
async def reminder_status(
    today: date | None = Query(None),
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, ReminderStatusRead]:
    """Count overdue, due-today and upcoming reminders."""

    contacts = await get_due_contacts(session, owner_id)
    summary = summarize_reminders(contacts, today=today or utcnow().date())
    return data_response(
        ReminderStatusRead(
            total=summary.total,
            overdue=summary.overdue,
            due_today=summary.due_today,
            upcoming=summary.upcoming,
        )
    )


@router.get("/due")
async def due_contacts(
    overdue_only: bool = False,
    today: date | None = Query(None),
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[ContactRead]]:
    """List contacts with a scheduled reminder, optionally only those due by today."""

    contacts = await get_due_contacts(session, owner_id)
    if overdue_only:
        contacts = filter_overdue(contacts, today=today or utcnow().date())
    return data_response([serialize_contact(item) for item in contacts])
