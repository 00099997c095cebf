"""Shared field types for request and response schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, Field

from reconnect.models.base import to_naive_utc

UTCDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]
TagName = Annotated[str, Field(min_length=1, max_length=30)]
