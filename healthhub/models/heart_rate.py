from sqlalchemy import Column, String, Text, DateTime, Integer, CheckConstraint, Index
from datetime import datetime
from healthhub.database.base import Base
import cuid
import pytz


class HeartRateRecord(Base):
    """
    Heart rate samples.
    Units: bpm, stored as integer; readers enforce the 0–65535 range.
    """
    __tablename__ = "heart_rate"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(Text, nullable=False, index=True)
    provider = Column(String(40), nullable=False, default="manual")

    timestamp = Column(DateTime(timezone=True), nullable=False)  # UTC
    value = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(pytz.UTC))

    __table_args__ = (
        CheckConstraint("value BETWEEN 0 AND 65535", name="ck_heart_rate_value_range").ddl_if(dialect="postgresql"),
        Index("ix_heart_rate_user_time", "user_id", "timestamp"),
    )
