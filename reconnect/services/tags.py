"""Owner-scoped tag lookups and contact-tag association management."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.core.errors import ResourceNotFoundError
from reconnect.models import ContactTag, Tag

logger = logging.getLogger(__name__)


def normalize_tag_names(names: Iterable[str]) -> list[str]:
    """Strip whitespace and drop blanks and duplicates, keeping the first spelling."""

    unique: list[str] = []
    for name in names:
        cleaned = name.strip()
        if cleaned and cleaned not in unique:
            unique.append(cleaned)
    return unique


async def list_tags(session: AsyncSession, owner_id: int) -> list[Tag]:
    result = await session.execute(
        select(Tag).where(Tag.owner_id == owner_id).order_by(Tag.name)
    )
    return list(result.scalars())


async def get_tag_by_name(session: AsyncSession, name: str, owner_id: int) -> Tag | None:
    result = await session.execute(
        select(Tag).where(Tag.name == name, Tag.owner_id == owner_id)
    )
    return result.scalars().first()


async def get_tag(session: AsyncSession, tag_id: int, owner_id: int) -> Tag:
    tag = await session.get(Tag, tag_id)
    if tag is None or tag.owner_id != owner_id:
        raise ResourceNotFoundError("Tag", tag_id)
    return tag


async def resolve_tags(session: AsyncSession, names: Iterable[str], owner_id: int) -> list[Tag]:
    """Return tags for ``names``, creating the ones the owner does not have yet."""

    wanted = normalize_tag_names(names)
    if not wanted:
        return []

    result = await session.execute(
        select(Tag).where(Tag.owner_id == owner_id, Tag.name.in_(wanted))
    )
    existing = {tag.name: tag for tag in result.scalars()}
    created: list[Tag] = []
    for name in wanted:
        if name not in existing:
            tag = Tag(name=name, owner_id=owner_id)
            session.add(tag)
            existing[name] = tag
            created.append(tag)
    if created:
        await session.flush()
        logger.info(
            "Created tags",
            extra={"owner_id": owner_id, "tag_names": [tag.name for tag in created]},
        )
    return [existing[name] for name in wanted]


async def replace_contact_tags(
    session: AsyncSession, contact_id: int, names: Iterable[str], owner_id: int
) -> list[Tag]:
    """Make ``names`` the complete tag set of a contact."""

    tags = await resolve_tags(session, names, owner_id)
    await session.execute(delete(ContactTag).where(ContactTag.contact_id == contact_id))
    for tag in tags:
        session.add(ContactTag(contact_id=contact_id, tag_id=tag.id))
    await session.flush()
    return tags


async def delete_tag(session: AsyncSession, tag: Tag) -> None:
    """Delete a tag and its contact associations; contacts are untouched."""

    await session.execute(delete(ContactTag).where(ContactTag.tag_id == tag.id))
    await session.delete(tag)
    await session.flush()
