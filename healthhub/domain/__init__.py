"""
Typed metric domain model.
"""

from .metric_kinds import METRIC_REGISTRY, MetricKind, MetricSpec, MetricValue
from .series import DataPoint, DataPointSeries, to_utc
from .user_id import UserId

__all__ = [
    "METRIC_REGISTRY",
    "MetricKind",
    "MetricSpec",
    "MetricValue",
    "DataPoint",
    "DataPointSeries",
    "to_utc",
    "UserId",
]
