"""
Shared enums for the application.
"""

from .metric_enums import (
    Unit,
    SleepStage
)

__all__ = [
    "Unit",
    "SleepStage"
]
