"""Bucket topic mentions into contiguous day/week/month periods."""
from __future__ import annotations

import logging
import numbers
from typing import Any, Dict, List, Mapping, Sequence

import numpy as np
import pandas as pd

from .models import TimeSeriesPoint, Topic
from .text import FieldAccessor, as_item_list, field_getter, item_text

logger = logging.getLogger(__name__)

INTERVAL_OFFSETS: Mapping[str, pd.DateOffset] = {
    "day": pd.DateOffset(days=1),
    "week": pd.DateOffset(days=7),
    "month": pd.DateOffset(months=1),
}


def from_epoch_millis(value: Any) -> Any:
    """Read a plain number as epoch milliseconds; other values pass through.

    Numbers outside the representable range become ``None``.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return value
    try:
        return pd.Timestamp(value, unit="ms", tz="UTC")
    except (ValueError, OverflowError):
        logger.debug("Epoch value %r is out of range", value)
        return None


def _term_list(terms: Any) -> List[str]:
    """Accept plain strings, :class:`Topic` models or topic mappings."""
    seen: Dict[str, None] = {}
    for entry in as_item_list(terms):
        if isinstance(entry, Topic):
            term = entry.term
        elif isinstance(entry, Mapping):
            term = entry.get("term") or entry.get("topic")
        else:
            term = entry
        if isinstance(term, str) and term:
            seen.setdefault(term, None)
    return list(seen)


def generate_periods(start: pd.Timestamp, end: pd.Timestamp, interval: str = "day") -> pd.DatetimeIndex:
    """Return period start times from *start* until the cursor passes *end*.

    Starts are computed as ``start + k * offset`` so month periods do not
    drift after a short month. The last period may extend past *end*.
    """
    offset = INTERVAL_OFFSETS[interval]
    starts = []
    k = 0
    cursor = start
    while cursor <= end:
        starts.append(cursor)
        k += 1
        cursor = start + offset * k
    return pd.DatetimeIndex(starts)


def generate_topic_time_series(
    items: Any,
    terms: Sequence[str] | Sequence[Topic],
    text_field: FieldAccessor = "text",
    date_field: FieldAccessor = "timestamp",
    interval: str = "day",
) -> Dict[str, List[TimeSeriesPoint]]:
    """Count, per period, the items whose text mentions each term.

    Every term gets one point per generated period (zero-filled), labelled
    with the ISO date of the period start. Items whose date cannot be parsed
    are left out of every bucket. Numeric dates are epoch milliseconds.
    """
    corpus = as_item_list(items)
    term_list = _term_list(terms)
    if not corpus or not term_list:
        return {}

    if interval not in INTERVAL_OFFSETS:
        logger.warning("Unknown interval %r, falling back to 'day'", interval)
        interval = "day"

    text_of = field_getter(text_field)
    date_of = field_getter(date_field)
    frame = pd.DataFrame(
        {
            "text": [item_text(item, text_of).lower() for item in corpus],
            "date": pd.to_datetime(
                pd.Series([from_epoch_millis(date_of(item)) for item in corpus], dtype="object"),
                errors="coerce",
                utc=True,
                format="mixed",
            ),
        }
    )
    undated = int(frame["date"].isna().sum())
    if undated:
        logger.debug("Skipping %d items without a parseable date", undated)
    frame = frame.dropna(subset=["date"]).sort_values("date", kind="mergesort")
    if frame.empty:
        return {}

    dates = frame["date"].dt.tz_convert(None)
    starts = generate_periods(dates.iloc[0], dates.iloc[-1], interval)
    # periods are [start_k, start_k+1); every date is >= starts[0]
    period_index = np.searchsorted(starts.values, dates.values, side="right") - 1

    counts = np.zeros((len(term_list), len(starts)), dtype=np.int64)
    lowered_terms = [term.lower() for term in term_list]
    for text, idx in zip(frame["text"], period_index):
        for row, term in enumerate(lowered_terms):
            if term in text:
                counts[row, idx] += 1

    labels = [start.strftime("%Y-%m-%d") for start in starts]
    logger.info(
        "Bucketed %d items into %d %s periods for %d terms",
        len(frame), len(starts), interval, len(term_list),
    )
    return {
        term: [
            TimeSeriesPoint(term=term, period_label=label, count=int(count))
            for label, count in zip(labels, counts[row])
        ]
        for row, term in enumerate(term_list)
    }
