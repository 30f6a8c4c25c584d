from sqlalchemy import Column, String, Text, DateTime, Float, Index
from datetime import datetime
from healthhub.database.base import Base
import cuid
import pytz


class WeightRecord(Base):
    """
    Body weight measurements.
    Units: kg
    """
    __tablename__ = "weight"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(Text, nullable=False, index=True)
    provider = Column(String(40), nullable=False, default="manual")

    timestamp = Column(DateTime(timezone=True), nullable=False)  # UTC
    value = Column(Float(precision=53), nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(pytz.UTC))

    __table_args__ = (
        Index("ix_weight_user_time", "user_id", "timestamp"),
    )


class HydrationRecord(Base):
    """
    Fluid intake entries.
    Units: mL
    """
    __tablename__ = "hydration"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(Text, nullable=False, index=True)
    provider = Column(String(40), nullable=False, default="manual")

    timestamp = Column(DateTime(timezone=True), nullable=False)  # UTC
    value = Column(Float(precision=53), nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(pytz.UTC))

    __table_args__ = (
        Index("ix_hydration_user_time", "user_id", "timestamp"),
    )


class VO2MaxRecord(Base):
    """
    VO2max estimates.
    Units: mL·kg⁻¹·min⁻¹
    """
    __tablename__ = "vo2_max"

    id = Column(String(25), primary_key=True, index=True, default=lambda: cuid.cuid())
    user_id = Column(Text, nullable=False, index=True)
    provider = Column(String(40), nullable=False, default="manual")

    timestamp = Column(DateTime(timezone=True), nullable=False)  # UTC
    value = Column(Float(precision=53), nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(pytz.UTC))

    __table_args__ = (
        Index("ix_vo2_max_user_time", "user_id", "timestamp"),
    )
