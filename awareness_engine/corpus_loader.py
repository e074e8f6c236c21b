"""Utilities for loading a CSV/JSON export into TextItem objects."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

import pandas as pd

from .models import TextItem
from .timeseries import from_epoch_millis

logger = logging.getLogger(__name__)


def _read_csv(path: Path) -> pd.DataFrame:
    # cells as written: "007" keeps its zeros, a text "NA" stays a text
    return pd.read_csv(path, dtype=str, keep_default_na=False)


_READERS = {
    ".csv": _read_csv,
    ".json": lambda path: pd.read_json(path, dtype=False),
    ".jsonl": lambda path: pd.read_json(path, lines=True, dtype=False),
}


def _clean(value: Any) -> Any:
    """Map pandas missing values (NaN/NaT/None) and empty cells to ``None``."""
    if value is None or (isinstance(value, str) and value == ""):
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):  # list-like cells
        return value
    return value


def _as_text(value: Any) -> str | None:
    value = _clean(value)
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        # integer ids in a JSON column with gaps arrive as floats
        value = int(value)
    return str(value)


def _as_float(value: Any) -> float | None:
    value = _clean(value)
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def _as_timestamp(value: Any) -> Any:
    """Parse a date cell; digit-only strings and numbers are epoch milliseconds.

    Raises ``ValueError`` for text pandas cannot read as a date.
    """
    value = _clean(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    value = _clean(from_epoch_millis(value))
    if value is None:
        return None
    return pd.Timestamp(value).to_pydatetime()


def load_text_items(
    path: Path | str,
    text_field: str = "text",
    platform_field: str = "platform",
    date_field: str = "timestamp",
    id_field: str = "id",
    sentiment_field: str = "sentiment",
) -> List[TextItem]:
    """Read a corpus export into :class:`TextItem` records.

    Parameters
    ----------
    path:
        ``.csv``, ``.json`` (records) or ``.jsonl`` file.
    text_field, platform_field, date_field, id_field, sentiment_field:
        Column names in the export; missing columns simply leave the
        corresponding attribute empty.

    Cell values are kept as written (no numeric guessing for ids or texts).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported corpus format {path.suffix!r}; expected one of {sorted(_READERS)}")

    df = reader(path)
    if df.empty:
        logger.warning("Corpus %s is empty", path)
        return []
    if text_field not in df.columns:
        logger.warning("Column %r not found in %s; every item will have empty text", text_field, path)

    items: List[TextItem] = []
    bad_dates = 0
    for row in df.to_dict(orient="records"):
        raw_id = _as_text(row.get(id_field))
        try:
            timestamp = _as_timestamp(row.get(date_field))
        except (ValueError, TypeError) as exc:
            # keep the text, drop the date
            logger.debug("Row %s has an invalid date (%s)", raw_id, exc)
            bad_dates += 1
            timestamp = None

        items.append(
            TextItem(
                id=raw_id,
                text=_as_text(row.get(text_field)) or "",
                platform=_as_text(row.get(platform_field)),
                timestamp=timestamp,
                sentiment=_as_float(row.get(sentiment_field)),
            )
        )

    if bad_dates:
        logger.warning("%d rows in %s had an unparseable date", bad_dates, path)
    logger.info("Loaded %d items from %s", len(items), path)
    return items
