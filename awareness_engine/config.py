"""Analysis options and their environment overrides."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, FrozenSet, Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

Interval = Literal["day", "week", "month"]


def _normalise_stopwords(value: Any) -> FrozenSet[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = value.split(",")
    return frozenset(str(word).strip().lower() for word in value if str(word).strip())


class TrendingConfig(BaseModel):
    """Options for the trending scorer."""

    min_frequency: int = Field(2, ge=1, description="Drop terms seen fewer times than this")
    max_topics: int = Field(50, ge=1, description="Result cap")
    include_ngrams: bool = Field(True, description="Also score contiguous phrases")
    ngram_size: int = Field(2, ge=2, description="Phrase length in tokens")
    stopwords: FrozenSet[str] = Field(default_factory=frozenset, description="Extra exclusions")
    max_growth_percent: Optional[float] = Field(
        None, gt=0, description="Optional ceiling on growth; unbounded when None"
    )

    model_config = {
        "frozen": True,
    }

    @field_validator("stopwords", mode="before")
    @classmethod
    def normalise_stopwords(cls, value: Any) -> FrozenSet[str]:
        return _normalise_stopwords(value)


class RelatedTopicsConfig(BaseModel):
    """Options for PMI related-topic discovery."""

    max_topics: int = Field(10, ge=1)
    min_co_occurrence: int = Field(2, ge=1)
    stopwords: FrozenSet[str] = Field(default_factory=frozenset)

    model_config = {
        "frozen": True,
    }

    @field_validator("stopwords", mode="before")
    @classmethod
    def normalise_stopwords(cls, value: Any) -> FrozenSet[str]:
        return _normalise_stopwords(value)


class TimeSeriesConfig(BaseModel):
    """Options for time-series bucketing."""

    interval: Interval = "day"

    model_config = {
        "frozen": True,
    }


class AnalysisConfig(BaseModel):
    """Umbrella configuration for a full pipeline run."""

    trending: TrendingConfig = Field(default_factory=TrendingConfig)
    related: RelatedTopicsConfig = Field(default_factory=RelatedTopicsConfig)
    time_series: TimeSeriesConfig = Field(default_factory=TimeSeriesConfig)
    text_field: str = "text"
    platform_field: str = "platform"
    date_field: str = "timestamp"
    correlation_top_k: int = Field(20, ge=0, description="Topics considered for pairwise correlation")
    related_top_k: int = Field(5, ge=0, description="Topics that get a related-topic lookup")

    model_config = {
        "frozen": True,
    }


# env var suffix -> (section, option)
_ENV_OPTIONS: Dict[str, tuple[str, str]] = {
    "MIN_FREQUENCY": ("trending", "min_frequency"),
    "MAX_TOPICS": ("trending", "max_topics"),
    "INCLUDE_NGRAMS": ("trending", "include_ngrams"),
    "NGRAM_SIZE": ("trending", "ngram_size"),
    "MAX_GROWTH_PERCENT": ("trending", "max_growth_percent"),
    "STOPWORDS": ("shared", "stopwords"),
    "MAX_RELATED": ("related", "max_topics"),
    "MIN_CO_OCCURRENCE": ("related", "min_co_occurrence"),
    "INTERVAL": ("time_series", "interval"),
}


def load_config_from_env(
    prefix: str = "AWARENESS_",
    env_file: str | os.PathLike | None = None,
    **overrides: Any,
) -> AnalysisConfig:
    """Build an :class:`AnalysisConfig` from ``.env``/environment variables.

    Values are left as strings and coerced by pydantic. Variables already in
    the environment win over *env_file* (default: the nearest ``.env``).
    *overrides* are ``section -> {option: value}`` dicts applied on top of the
    environment, which is how the CLI layers its flags over env defaults.
    """
    load_dotenv(env_file)

    sections: Dict[str, Dict[str, Any]] = {"trending": {}, "related": {}, "time_series": {}}
    for suffix, (section, option) in _ENV_OPTIONS.items():
        raw = os.getenv(prefix + suffix)
        if raw is None or raw == "":
            continue
        if section == "shared":
            sections["trending"][option] = raw
            sections["related"][option] = raw
        else:
            sections[section][option] = raw
        logger.debug("Config %s=%s taken from environment", prefix + suffix, raw)

    for section, values in overrides.items():
        if section in sections and values:
            sections[section].update({k: v for k, v in values.items() if v is not None})

    return AnalysisConfig(
        trending=TrendingConfig(**sections["trending"]),
        related=RelatedTopicsConfig(**sections["related"]),
        time_series=TimeSeriesConfig(**sections["time_series"]),
    )
