"""Pydantic schemas for tag resources."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator

from reconnect.schemas.common import TagName


class TagCreate(BaseModel):
    name: TagName

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            msg = "Tag name must not be empty"
            raise ValueError(msg)
        return cleaned


class TagRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime


class TagCountRead(BaseModel):
    id: int
    name: str
    count: int
