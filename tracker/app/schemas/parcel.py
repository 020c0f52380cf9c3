"""
Parcel Pydantic schemas.

Defines the value object exchanged between the parcel store and its callers.
"""

from datetime import datetime, timedelta, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator
from tracker.app.models.parcel_enums import ParcelStatus


def format_timestamp(moment: datetime) -> str:
    """
    Render ``moment`` as an RFC 3339 UTC string with second precision.

    Naive datetimes are treated as UTC. Example: ``2024-01-02T03:04:05Z``.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp, accepting the ``Z`` suffix."""
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError("timestamp must carry a UTC offset")
    return parsed


class ParcelRecord(BaseModel):
    """
    A parcel as seen by callers of the store.

    ``number`` stays 0 until storage assigns one on insert.
    """
    model_config = ConfigDict(from_attributes=True)

    number: int = Field(default=0, ge=0, description="Storage-assigned parcel number")
    client: int = Field(..., description="Owning client identifier")
    status: ParcelStatus = Field(default=ParcelStatus.REGISTERED, description="Lifecycle status")
    address: str = Field(..., description="Free-text delivery address")
    created_at: str = Field(..., description="Creation time, RFC 3339 in UTC")

    @field_validator("created_at")
    @classmethod
    def created_at_must_be_rfc3339_utc(cls, v: str) -> str:
        try:
            parsed = parse_timestamp(v)
        except ValueError as exc:
            raise ValueError(f"created_at is not an RFC 3339 timestamp: {v!r}") from exc
        if parsed.utcoffset() != timedelta(0):
            raise ValueError(f"created_at must be in UTC: {v!r}")
        return v
