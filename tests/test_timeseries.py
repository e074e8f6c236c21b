from datetime import datetime

import pandas as pd
import pytest

from awareness_engine.models import Topic
from awareness_engine.timeseries import from_epoch_millis, generate_periods, generate_topic_time_series

ITEMS = [
    {"text": "koken thuis", "timestamp": "2024-01-01T09:00:00"},
    {"text": "bakken", "timestamp": "2024-01-01T18:00:00"},
    {"text": "koken en bakken", "timestamp": "2024-01-03T12:00:00"},
    {"text": "Koken!", "timestamp": "2024-01-02T08:00:00"},
]


def _counts(series, term):
    return [point.count for point in series[term]]


def test_daily_buckets_are_contiguous_and_zero_filled() -> None:
    series = generate_topic_time_series(ITEMS, ["koken", "bakken"])

    assert [p.period_label for p in series["koken"]] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    # periods start at the earliest timestamp, so 01-02 08:00 still falls in the first day
    assert _counts(series, "koken") == [2, 0, 1]
    assert _counts(series, "bakken") == [1, 0, 1]
    assert all(p.term == "koken" for p in series["koken"])


def test_weekly_interval_and_topic_input() -> None:
    series = generate_topic_time_series(ITEMS, [Topic(term="koken", frequency=3)], interval="week")
    assert [p.period_label for p in series["koken"]] == ["2024-01-01"]
    assert _counts(series, "koken") == [3]


def test_monthly_periods_do_not_drift() -> None:
    items = [
        {"text": "koken", "timestamp": datetime(2024, 1, 31, 12)},
        {"text": "koken", "timestamp": datetime(2024, 3, 1, 8)},
    ]
    series = generate_topic_time_series(items, ["koken"], interval="month")
    assert [p.period_label for p in series["koken"]] == ["2024-01-31", "2024-02-29"]
    assert _counts(series, "koken") == [1, 1]


def test_generate_periods() -> None:
    start = pd.Timestamp("2024-01-31")
    periods = generate_periods(start, pd.Timestamp("2024-04-30"), "month")
    assert [p.strftime("%Y-%m-%d") for p in periods] == ["2024-01-31", "2024-02-29", "2024-03-31", "2024-04-30"]
    assert len(generate_periods(start, start, "day")) == 1


def test_undated_items_are_skipped() -> None:
    items = ITEMS + [{"text": "koken"}, {"text": "koken", "timestamp": "not a date"}]
    series = generate_topic_time_series(items, ["koken"])
    assert _counts(series, "koken") == [2, 0, 1]


def test_unknown_interval_falls_back_to_day(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level("WARNING"):
        series = generate_topic_time_series(ITEMS, ["koken"], interval="fortnight")
    assert len(series["koken"]) == 3
    assert "fortnight" in caplog.text


def test_empty_inputs() -> None:
    assert generate_topic_time_series([], ["koken"]) == {}
    assert generate_topic_time_series(ITEMS, []) == {}
    assert generate_topic_time_series([{"text": "koken"}], ["koken"]) == {}


def test_numeric_timestamps_are_epoch_milliseconds() -> None:
    items = [
        {"text": "koken", "timestamp": 1709287200000},  # 2024-03-01 10:00 UTC
        {"text": "koken en bakken", "timestamp": 1709373600000.0},  # one day later
    ]
    series = generate_topic_time_series(items, ["koken", "bakken"])

    assert [p.period_label for p in series["koken"]] == ["2024-03-01", "2024-03-02"]
    assert _counts(series, "koken") == [1, 1]
    assert _counts(series, "bakken") == [0, 1]


def test_from_epoch_millis() -> None:
    assert from_epoch_millis(1709287200000) == pd.Timestamp("2024-03-01T10:00:00", tz="UTC")
    assert from_epoch_millis(1e30) is None
    assert from_epoch_millis("2024-03-01") == "2024-03-01"
    assert from_epoch_millis(True) is True
    assert from_epoch_millis(None) is None
