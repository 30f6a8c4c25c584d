from sqlalchemy import Column, String, Text, DateTime, Integer, Enum as SQLEnum, Index
from datetime import datetime
from healthhub.database.base import Base
from healthhub.enums import SleepStage
import cuid
import pytz


class SleepDurationRecord(Base):
    """
    Total sleep per night.
    Units: minutes
    """
    __tablename__ = "sleep_duration"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(Text, nullable=False, index=True)
    provider = Column(String(40), nullable=False, default="manual")

    timestamp = Column(DateTime(timezone=True), nullable=False)  # UTC
    value = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(pytz.UTC))

    __table_args__ = (
        Index("ix_sleep_duration_user_time", "user_id", "timestamp"),
    )


class SleepStageRecord(Base):
    """
    Sleep stage transitions; stages: 'awake'|'light'|'deep'|'rem'
    """
    __tablename__ = "sleep_stage"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(Text, nullable=False, index=True)
    provider = Column(String(40), nullable=False, default="manual")

    timestamp = Column(DateTime(timezone=True), nullable=False)  # UTC
    # Type name differs from the table name: PostgreSQL gives each table a row type of the same name
    value = Column(
        SQLEnum(SleepStage, name="sleep_stage_value", values_callable=lambda stages: [s.value for s in stages]),
        nullable=False
    )

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(pytz.UTC))

    __table_args__ = (
        Index("ix_sleep_stage_user_time", "user_id", "timestamp"),
    )
