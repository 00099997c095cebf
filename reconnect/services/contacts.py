"""Contact lookups and lifecycle operations."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.core.errors import ResourceNotFoundError
from reconnect.models import Contact, ContactLog, ContactTag, EventContact

logger = logging.getLogger(__name__)


async def get_contact(session: AsyncSession, contact_id: int, owner_id: int) -> Contact:
    contact = await session.get(Contact, contact_id)
    if contact is None or contact.owner_id != owner_id:
        raise ResourceNotFoundError("Contact", contact_id)
    return contact


async def list_contacts(session: AsyncSession, owner_id: int) -> list[Contact]:
    result = await session.execute(
        select(Contact)
        .where(Contact.owner_id == owner_id)
        .order_by(Contact.last_name, Contact.first_name, Contact.id)
    )
    return list(result.scalars())


async def ensure_contacts_exist(
    session: AsyncSession, contact_ids: Sequence[int], owner_id: int
) -> list[int]:
    """Return the distinct ids in order, failing on the first unknown one."""

    distinct_ids = list(dict.fromkeys(contact_ids))
    if not distinct_ids:
        return []
    result = await session.execute(
        select(Contact.id).where(Contact.owner_id == owner_id, Contact.id.in_(distinct_ids))
    )
    found = set(result.scalars())
    for contact_id in distinct_ids:
        if contact_id not in found:
            raise ResourceNotFoundError("Contact", contact_id)
    return distinct_ids


async def delete_contact(session: AsyncSession, contact: Contact) -> None:
    """Delete a contact with its logs, tag links and event links.

    Tags and events themselves survive; only the junction rows go.
    """

    contact_id = contact.id
    await session.execute(delete(ContactLog).where(ContactLog.contact_id == contact_id))
    await session.execute(delete(ContactTag).where(ContactTag.contact_id == contact_id))
    await session.execute(delete(EventContact).where(EventContact.contact_id == contact_id))
    await session.delete(contact)
    await session.flush()
    logger.info("Deleted contact", extra={"contact_id": contact_id})
