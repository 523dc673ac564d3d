"""SQLAlchemy model for the shared key-value record table."""

from sqlalchemy import Column, DateTime, String, Text

from ho_connect.infrastructure.database import Base
from ho_connect.utils import now_in_app_naive_datetime


class RecordModel(Base):
    """One serialized collection stored under its key."""

    __tablename__ = "record"

    key = Column(String(120), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["RecordModel"]
