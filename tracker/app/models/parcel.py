"""
Parcel database model.

One row per tracked parcel in the "parcel" table.
"""

from sqlalchemy import Column, Enum, Integer, Text
from tracker.app.db.session import Base
from tracker.app.models.parcel_enums import ParcelStatus


class ParcelRow(Base):
    """
    Parcel table row.

    Numbers come from an AUTOINCREMENT primary key so a deleted parcel's
    number is never handed out again on SQLite.
    """
    __tablename__ = "parcel"
    __table_args__ = {"sqlite_autoincrement": True}

    number = Column(Integer, primary_key=True, autoincrement=True)

    # Owning client (not validated against any registry)
    client = Column(Integer, nullable=False, index=True)

    # Stored as the plain lowercase label, guarded by a CHECK constraint
    status = Column(
        Enum(
            ParcelStatus,
            name="parcel_status",
            native_enum=False,
            create_constraint=True,
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
    )
    address = Column(Text, nullable=False)

    # RFC 3339 text, written once
    created_at = Column(Text, nullable=False)

    def __repr__(self):
        return f"<ParcelRow(number={self.number}, client={self.client}, status='{self.status.value}')>"
