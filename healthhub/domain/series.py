from datetime import datetime
from typing import Any, Tuple

import pytz
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from healthhub.domain.metric_kinds import MetricKind, MetricValue
from healthhub.enums import Unit
from healthhub.exceptions.errors import DecodeRangeError


def to_utc(value: datetime) -> datetime:
    """Normalize to aware UTC; naive datetimes are taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=pytz.UTC)
    return value.astimezone(pytz.UTC)


class DataPoint(BaseModel):
    """A single immutable measurement of one metric kind."""

    model_config = ConfigDict(frozen=True)

    kind: MetricKind
    value: MetricValue
    timestamp: datetime

    @model_validator(mode="before")
    @classmethod
    def coerce_value_for_kind(cls, data: Any):
        if not isinstance(data, dict) or "kind" not in data or "value" not in data:
            return data
        try:
            kind = MetricKind(data["kind"])
        except ValueError:
            return data
        try:
            value = kind.decode(data["value"])
        except DecodeRangeError as exc:
            raise ValueError(f"Invalid {kind.value} value {exc.raw_value!r}: {exc.reason}")
        return {**data, "kind": kind, "value": value}

    @field_validator("timestamp")
    @classmethod
    def convert_to_utc(cls, v: datetime) -> datetime:
        return to_utc(v)


class DataPointSeries(BaseModel):
    """Ordered, immutable sequence of points sharing one kind."""

    model_config = ConfigDict(frozen=True)

    kind: MetricKind
    points: Tuple[DataPoint, ...] = ()

    @model_validator(mode="after")
    def check_point_kinds(self):
        for point in self.points:
            if point.kind != self.kind:
                raise ValueError(
                    f"Series of {self.kind.value} cannot hold a {point.kind.value} point"
                )
        return self

    @property
    def unit(self) -> Unit:
        return self.kind.unit

    def is_sorted(self) -> bool:
        return all(
            earlier.timestamp <= later.timestamp
            for earlier, later in zip(self.points, self.points[1:])
        )
