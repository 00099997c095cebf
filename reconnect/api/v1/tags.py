"""Tag API routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from reconnect.api.deps import get_owner_id
from reconnect.api.v1.common import data_response
from reconnect.core.db import get_session
from reconnect.models import Tag
from reconnect.schemas import TagCreate, TagRead
from reconnect.services.tags import delete_tag as remove_tag
from reconnect.services.tags import get_tag, get_tag_by_name, list_tags as load_tags

router = APIRouter(prefix="/tags", tags=["tags"])

TAG_EXISTS_DETAIL = {"code": "TAG_EXISTS", "message": "Tag already exists"}


@router.get("")
async def list_tags(
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, list[TagRead]]:
    """List the owner's tags alphabetically."""

    tags = await load_tags(session, owner_id)
    return data_response([TagRead.model_validate(tag) for tag in tags])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, TagRead]:
    """Create a tag; names are unique per owner."""

    if await get_tag_by_name(session, payload.name, owner_id) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=TAG_EXISTS_DETAIL)

    tag = Tag(name=payload.name, owner_id=owner_id)
    session.add(tag)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=TAG_EXISTS_DETAIL
        ) from exc
    return data_response(TagRead.model_validate(tag))


@router.delete("/{tag_id}")
async def delete_tag(
    tag_id: int,
    owner_id: int = Depends(get_owner_id),
    session: AsyncSession = Depends(get_session),
) -> dict[str, dict[str, bool]]:
    """Delete a tag and detach it from every contact."""

    tag = await get_tag(session, tag_id, owner_id)
    await remove_tag(session, tag)
    await session.commit()
    return data_response({"deleted": True})
