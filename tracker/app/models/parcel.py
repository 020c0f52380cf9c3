"""
Parcel database model.

A single table holds every tracked parcel.
"""

from sqlalchemy import Column, Integer, String, Text, Enum
from tracker.app.db.session import Base
from tracker.app.models.parcel_enums import ParcelStatus


class Parcel(Base):
    """
    Parcel model for the tracker.

    A parcel belongs to a client and moves through
    registered → sent → delivered. ``created_at`` is stored as an
    RFC 3339 UTC string exactly as the caller supplied it.
    """
    __tablename__ = "parcels"
    # Never hand out the number of a deleted parcel again
    __table_args__ = {"sqlite_autoincrement": True}

    number = Column(Integer, primary_key=True, autoincrement=True)

    # Ownership
    client = Column(Integer, nullable=False, index=True)

    # Status (stored as the lowercase enum value, bounded by a CHECK constraint)
    status = Column(
        Enum(
            ParcelStatus,
            name="parcel_status",
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            length=16,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=ParcelStatus.REGISTERED,
    )

    # Delivery information
    address = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(String(64), nullable=False)

    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status.value}')>"
