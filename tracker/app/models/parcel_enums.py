"""
Parcel Status Enumeration.
"""

import enum
from typing import Optional


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.

    Status flow:
        REGISTERED → SENT → DELIVERED
    Only REGISTERED parcels accept address changes and deletion.
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"


_NEXT_STATUS = {
    ParcelStatus.REGISTERED: ParcelStatus.SENT,
    ParcelStatus.SENT: ParcelStatus.DELIVERED,
}


def is_mutable(status: ParcelStatus) -> bool:
    """Return True when a parcel in ``status`` may change address or be deleted."""
    return status == ParcelStatus.REGISTERED


def next_status(status: ParcelStatus) -> Optional[ParcelStatus]:
    """Return the following lifecycle status, or None once delivered."""
    return _NEXT_STATUS.get(ParcelStatus(status))
