"""Tests for data points, series invariants and the JSON representation."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from conftest import utc
from healthhub.domain import DataPoint, DataPointSeries, MetricKind
from healthhub.enums import SleepStage, Unit
from healthhub.schemas.metric_schemas import MetricInfoResponse, MetricSeriesResponse


def _series(kind, rows):
    return DataPointSeries(
        kind=kind,
        points=tuple(DataPoint(kind=kind, value=value, timestamp=utc(ts)) for value, ts in rows),
    )


class TestDataPoint:
    def test_is_immutable(self):
        point = DataPoint(kind=MetricKind.HEART_RATE, value=72, timestamp=utc("2024-01-01T00:00:00Z"))
        with pytest.raises(ValidationError):
            point.value = 80

    def test_value_coerced_to_kind_scalar(self):
        point = DataPoint(kind=MetricKind.WEIGHT, value=80, timestamp=utc("2024-01-01T00:00:00Z"))
        assert isinstance(point.value, float)

        stage = DataPoint(kind=MetricKind.SLEEP_STAGE, value="rem", timestamp=utc("2024-01-01T00:00:00Z"))
        assert stage.value is SleepStage.REM

    def test_rejects_value_outside_kind(self):
        with pytest.raises(ValidationError):
            DataPoint(kind=MetricKind.HEART_RATE, value=70000, timestamp=utc("2024-01-01T00:00:00Z"))

    def test_timestamp_normalized_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        point = DataPoint(
            kind=MetricKind.HEART_RATE,
            value=60,
            timestamp=datetime(2024, 1, 1, 2, 0, tzinfo=plus_two),
        )
        assert point.timestamp == utc("2024-01-01T00:00:00Z")
        assert point.timestamp.utcoffset() == timedelta(0)

    def test_naive_timestamp_taken_as_utc(self):
        point = DataPoint(kind=MetricKind.HEART_RATE, value=60, timestamp=datetime(2024, 1, 1))
        assert point.timestamp == utc("2024-01-01T00:00:00Z")


class TestDataPointSeries:
    @pytest.mark.parametrize("kind", list(MetricKind))
    def test_unit_follows_kind(self, kind):
        assert DataPointSeries(kind=kind).unit is kind.unit

    def test_rejects_mixed_kinds(self):
        point = DataPoint(kind=MetricKind.WEIGHT, value=80.0, timestamp=utc("2024-01-01T00:00:00Z"))
        with pytest.raises(ValidationError):
            DataPointSeries(kind=MetricKind.HEART_RATE, points=(point,))

    def test_is_sorted(self):
        assert _series(MetricKind.HEART_RATE, [(1, "2024-01-01T00:00:00Z"), (2, "2024-01-01T00:00:00Z")]).is_sorted()
        assert not _series(MetricKind.HEART_RATE, [(1, "2024-01-02T00:00:00Z"), (2, "2024-01-01T00:00:00Z")]).is_sorted()


class TestSerialization:
    def test_heart_rate_body(self):
        series = _series(MetricKind.HEART_RATE, [(72, "2024-01-01T00:00:00Z"), (75, "2024-01-01T00:01:00Z")])
        body = json.loads(MetricSeriesResponse.from_series(series).model_dump_json())
        assert body == {
            "points": [
                {"value": 72, "timestamp": 1704067200},
                {"value": 75, "timestamp": 1704067260},
            ],
            "unit": "bpm",
        }
        assert all(isinstance(p["value"], int) for p in body["points"])

    def test_sleep_stage_body(self):
        series = _series(MetricKind.SLEEP_STAGE, [("rem", "2024-01-02T03:00:00Z")])
        body = json.loads(MetricSeriesResponse.from_series(series).model_dump_json())
        assert body == {"points": [{"value": "rem", "timestamp": 1704164400}], "unit": ""}

    def test_floats_stay_floats(self):
        series = _series(MetricKind.VO2_MAX, [(42.5, "2024-01-01T00:00:00Z"), (43, "2024-01-02T00:00:00Z")])
        text = MetricSeriesResponse.from_series(series).model_dump_json()
        values = [p["value"] for p in json.loads(text)["points"]]
        assert values == [42.5, 43.0]
        assert all(isinstance(v, float) for v in values)
        assert Unit.ML_KG_MIN.symbol in text

    def test_empty_series_keeps_unit(self):
        body = MetricSeriesResponse.from_series(DataPointSeries(kind=MetricKind.WEIGHT)).model_dump()
        assert body == {"points": [], "unit": "kg"}

    def test_sub_second_timestamps_floor(self):
        series = DataPointSeries(
            kind=MetricKind.HEART_RATE,
            points=(DataPoint(kind=MetricKind.HEART_RATE, value=60,
                              timestamp=utc("2024-01-01T00:00:00Z") + timedelta(milliseconds=999)),),
        )
        assert MetricSeriesResponse.from_series(series).points[0].timestamp == 1704067200

    def test_metric_catalogue_entry(self):
        info = MetricInfoResponse.from_kind(MetricKind.HYDRATION)
        assert info.model_dump() == {"name": "hydration", "display_name": "Hydration", "unit": "mL"}
