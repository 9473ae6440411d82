"""
Parcel Pydantic schemas.

Defines the in-memory parcel record exchanged with the store.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from tracker.app.models.parcel_enums import ParcelStatus

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def now_rfc3339() -> str:
    """Current UTC time as an RFC 3339 string with second precision."""
    return datetime.now(timezone.utc).strftime(RFC3339_FORMAT)


class Parcel(BaseModel):
    """
    Parcel record.

    Frozen: fields change only through ParcelStore, and a copy with a new
    value is made with ``model_copy(update=...)``.
    """
    number: Optional[int] = Field(None, description="Store-assigned parcel number")
    client: int = Field(..., description="Owning client identifier")
    status: ParcelStatus = Field(ParcelStatus.REGISTERED, description="Current delivery status")
    address: str = Field(..., description="Delivery address")
    created_at: str = Field(default_factory=now_rfc3339, description="RFC 3339 creation time")

    class Config:
        frozen = True
