"""
Metric type registry.

Each MetricKind statically fixes its scalar value type, unit, display name,
backing table and the rule that decodes a raw database value.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Union

from healthhub.enums import SleepStage, Unit
from healthhub.exceptions.errors import DecodeRangeError, UnknownMetricError

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
HEART_RATE_MAX = 65535

MetricValue = Union[int, float, SleepStage]


class MetricKind(str, Enum):
    HEART_RATE = "heart_rate"
    WEIGHT = "weight"
    HYDRATION = "hydration"
    VO2_MAX = "vo2_max"
    SLEEP_DURATION = "sleep_duration"
    SLEEP_STAGE = "sleep_stage"

    @classmethod
    def from_name(cls, name: str) -> "MetricKind":
        """Resolve an external metric name; matching is exact."""
        try:
            return cls(name)
        except ValueError:
            raise UnknownMetricError(name)

    @property
    def spec(self) -> "MetricSpec":
        return METRIC_REGISTRY[self]

    @property
    def unit(self) -> Unit:
        return self.spec.unit

    @property
    def display_name(self) -> str:
        return self.spec.display_name

    @property
    def scalar_type(self) -> type:
        return self.spec.scalar_type

    @property
    def table_name(self) -> str:
        return self.value

    def decode(self, raw: Any) -> MetricValue:
        return self.spec.decoder(self, raw)


@dataclass(frozen=True)
class MetricSpec:
    scalar_type: type
    unit: Unit
    display_name: str
    decoder: Callable[[MetricKind, Any], MetricValue]


def _decode_int32(kind: MetricKind, raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise DecodeRangeError(kind.value, raw, "expected an integer")
    if not INT32_MIN <= raw <= INT32_MAX:
        raise DecodeRangeError(kind.value, raw, "outside signed 32-bit range")
    return raw


def _decode_heart_rate(kind: MetricKind, raw: Any) -> int:
    value = _decode_int32(kind, raw)
    if not 0 <= value <= HEART_RATE_MAX:
        raise DecodeRangeError(kind.value, raw, f"outside [0, {HEART_RATE_MAX}]")
    return value


def _decode_float(kind: MetricKind, raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
        raise DecodeRangeError(kind.value, raw, "expected a number")
    value = float(raw)
    if not math.isfinite(value):
        raise DecodeRangeError(kind.value, raw, "not a finite number")
    return value


def _decode_sleep_stage(kind: MetricKind, raw: Any) -> SleepStage:
    if isinstance(raw, SleepStage):
        return raw
    if isinstance(raw, str):
        try:
            return SleepStage(raw)
        except ValueError:
            pass
    raise DecodeRangeError(kind.value, raw, "expected one of awake|light|deep|rem")


METRIC_REGISTRY: Dict[MetricKind, MetricSpec] = {
    MetricKind.HEART_RATE: MetricSpec(int, Unit.BPM, "Heart rate", _decode_heart_rate),
    MetricKind.WEIGHT: MetricSpec(float, Unit.KG, "Weight", _decode_float),
    MetricKind.HYDRATION: MetricSpec(float, Unit.ML, "Hydration", _decode_float),
    MetricKind.VO2_MAX: MetricSpec(float, Unit.ML_KG_MIN, "VO2Max", _decode_float),
    MetricKind.SLEEP_DURATION: MetricSpec(int, Unit.MIN, "Sleep duration", _decode_int32),
    MetricKind.SLEEP_STAGE: MetricSpec(SleepStage, Unit.UNITLESS, "Sleep stage", _decode_sleep_stage),
}
