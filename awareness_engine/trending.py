"""Trending-topic scoring: frequency plus period-over-period growth."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Sequence

from pydantic import ValidationError

from .config import TrendingConfig
from .frequency import count_terms, extract_ngrams
from .models import NGram, Topic
from .text import FieldAccessor, as_item_list, contains_term, field_getter, item_text

logger = logging.getLogger(__name__)

FREQUENCY_WEIGHT = 0.7
GROWTH_WEIGHT = 0.3
NEW_TOPIC_GROWTH = 100.0


def coerce_config(config: Any, model: type) -> Any:
    """Accept a config model, a plain mapping or ``None``."""
    if config is None:
        return model()
    if isinstance(config, model):
        return config
    if isinstance(config, Mapping):
        return model(**config)
    return model.model_validate(config, from_attributes=True)


def coerce_topics(topics: Any) -> List[Topic]:
    """Validate ranked topics given as models or plain mappings.

    Mappings may use ``topic`` instead of ``term`` and carry numbers as
    strings; pydantic coerces them. Malformed entries are skipped.
    """
    result: List[Topic] = []
    for entry in as_item_list(topics):
        if isinstance(entry, Topic):
            result.append(entry)
            continue
        if not isinstance(entry, Mapping):
            logger.debug("Skipping topic of unsupported type %s", type(entry).__name__)
            continue
        data = dict(entry)
        if "term" not in data and "topic" in data:
            data["term"] = data.pop("topic")
        try:
            result.append(Topic.model_validate(data))
        except ValidationError as exc:
            logger.debug("Skipping malformed topic %r: %s", entry, exc)
    return result


def calculate_growth(frequency: int, previous_frequency: int, cap: float | None = None) -> float:
    """Growth in percent; a new term seen more than once counts as +100%.

    Without *cap* the value is unbounded (1 -> 50 gives 4900%).
    """
    if previous_frequency > 0:
        growth = (frequency - previous_frequency) / previous_frequency * 100
    elif frequency > 1:
        growth = NEW_TOPIC_GROWTH
    else:
        growth = 0.0
    if cap is not None and growth > cap:
        return float(cap)
    return float(growth)


def trending_score(frequency: int, growth: float) -> float:
    return FREQUENCY_WEIGHT * frequency + GROWTH_WEIGHT * growth


def _term_space(items: List[Any], text_field: FieldAccessor, cfg: TrendingConfig) -> Dict[str, int]:
    terms = count_terms(items, text_field, cfg.stopwords)
    if cfg.include_ngrams:
        terms.update(extract_ngrams(items, text_field, cfg.ngram_size, cfg.stopwords))
    return terms


def calculate_trending_topics(
    current: Any,
    previous: Any = None,
    text_field: FieldAccessor = "text",
    config: TrendingConfig | Mapping[str, Any] | None = None,
) -> List[Topic]:
    """Rank the terms of *current* against *previous* by trending score.

    Unigrams come first in the term space, then n-grams; the sort is stable so
    equal scores keep that order. Multi-token terms are returned as
    :class:`NGram`.
    """
    current_items = as_item_list(current)
    if not current_items:
        return []

    cfg = coerce_config(config, TrendingConfig)
    start_time = time.time()

    current_terms = _term_space(current_items, text_field, cfg)
    previous_items = as_item_list(previous)
    previous_terms = _term_space(previous_items, text_field, cfg) if previous_items else {}

    topics: List[Topic] = []
    for term, frequency in current_terms.items():
        if frequency < cfg.min_frequency:
            continue
        previous_frequency = previous_terms.get(term, 0)
        growth = calculate_growth(frequency, previous_frequency, cfg.max_growth_percent)
        values = dict(
            term=term,
            frequency=frequency,
            previous_frequency=previous_frequency,
            growth_percent=growth,
            trending_score=trending_score(frequency, growth),
            is_new=previous_frequency == 0 and frequency > 1,
        )
        size = term.count(" ") + 1
        topics.append(NGram(size=size, **values) if size > 1 else Topic(**values))

    ranked = sorted(topics, key=lambda t: t.trending_score, reverse=True)[: cfg.max_topics]
    logger.info(
        "Scored %d candidate terms, kept %d trending topics in %.2fs",
        len(current_terms), len(ranked), time.time() - start_time,
    )
    return ranked


def group_topics_by_platform(
    items: Any,
    topics: Sequence[Topic],
    text_field: FieldAccessor = "text",
    platform_field: FieldAccessor = "platform",
) -> Dict[str, List[Topic]]:
    """Return ``platform -> topics`` present in at least one item of that platform.

    Items without a platform are grouped under ``"unknown"``; each list keeps
    the ranking order of *topics*.
    """
    corpus = as_item_list(items)
    ranked = coerce_topics(topics)
    if not corpus or not ranked:
        return {}

    text_of = field_getter(text_field)
    platform_of = field_getter(platform_field)

    texts_by_platform: Dict[str, List[str]] = {}
    for item in corpus:
        platform = platform_of(item) or "unknown"
        texts_by_platform.setdefault(str(platform), []).append(item_text(item, text_of))

    return {
        platform: [t for t in ranked if any(contains_term(text, t.term) for text in texts)]
        for platform, texts in texts_by_platform.items()
    }
