"""
Models package for the application.
"""

from healthhub.domain import MetricKind

from .heart_rate import HeartRateRecord
from .body_metrics import WeightRecord, HydrationRecord, VO2MaxRecord
from .sleep import SleepDurationRecord, SleepStageRecord

# One backing table per metric kind
METRIC_MODELS = {
    MetricKind.HEART_RATE: HeartRateRecord,
    MetricKind.WEIGHT: WeightRecord,
    MetricKind.HYDRATION: HydrationRecord,
    MetricKind.VO2_MAX: VO2MaxRecord,
    MetricKind.SLEEP_DURATION: SleepDurationRecord,
    MetricKind.SLEEP_STAGE: SleepStageRecord,
}

__all__ = [
    "HeartRateRecord",
    "WeightRecord",
    "HydrationRecord",
    "VO2MaxRecord",
    "SleepDurationRecord",
    "SleepStageRecord",
    "METRIC_MODELS",
]
