import calendar
from typing import List, Union

from pydantic import BaseModel, Field

from healthhub.domain import DataPoint, DataPointSeries, MetricKind
from healthhub.enums import SleepStage


class DataPointResponse(BaseModel):
    """Single serialized measurement"""
    value: Union[int, float, str] = Field(..., description="Integer, float or sleep stage text depending on the metric")
    timestamp: int = Field(..., description="Seconds since the Unix epoch (UTC)")

    @classmethod
    def from_point(cls, point: DataPoint) -> "DataPointResponse":
        value = point.value.value if isinstance(point.value, SleepStage) else point.value
        return cls(value=value, timestamp=calendar.timegm(point.timestamp.utctimetuple()))


class MetricSeriesResponse(BaseModel):
    """Serialized time series with its unit symbol"""
    points: List[DataPointResponse]
    unit: str = Field(..., description="Unit display symbol, empty for unitless metrics")

    @classmethod
    def from_series(cls, series: DataPointSeries) -> "MetricSeriesResponse":
        return cls(
            points=[DataPointResponse.from_point(point) for point in series.points],
            unit=series.unit.symbol
        )

    class Config:
        json_schema_extra = {
            "example": {
                "points": [
                    {"value": 72, "timestamp": 1704067200},
                    {"value": 75, "timestamp": 1704067260}
                ],
                "unit": "bpm"
            }
        }


class MetricInfoResponse(BaseModel):
    """Catalogue entry for a supported metric"""
    name: str
    display_name: str
    unit: str

    @classmethod
    def from_kind(cls, kind: MetricKind) -> "MetricInfoResponse":
        return cls(name=kind.value, display_name=kind.display_name, unit=kind.unit.symbol)


class ProviderInfoResponse(BaseModel):
    """Catalogue entry for a registered provider adapter"""
    provider_id: str
    provider_name: str
    supported_metrics: List[str]
