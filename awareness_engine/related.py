"""Related-topic discovery via pointwise mutual information (PMI)."""
from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping

from .config import RelatedTopicsConfig
from .frequency import count_terms
from .models import RelatedTopic
from .text import FieldAccessor, as_item_list, contains_term, field_getter, item_text
from .trending import coerce_config

logger = logging.getLogger(__name__)


def pointwise_mutual_information(
    subset_frequency: int,
    subset_size: int,
    corpus_frequency: int,
    corpus_size: int,
) -> float | None:
    """``log2(P(term | focal) / (P(term) * P(focal)))`` or ``None`` when undefined.

    ``None`` covers every zero denominator and non-positive ratio, so callers
    can drop the record instead of sorting a NaN.
    """
    if min(subset_frequency, subset_size, corpus_frequency, corpus_size) <= 0:
        return None
    p_term_given_focal = subset_frequency / subset_size
    p_term = corpus_frequency / corpus_size
    p_focal = subset_size / corpus_size
    ratio = p_term_given_focal / (p_term * p_focal)
    if ratio <= 0 or not math.isfinite(ratio):
        return None
    pmi = math.log2(ratio)
    return pmi if math.isfinite(pmi) else None


def find_related_topics(
    items: Any,
    focal_term: str | None,
    text_field: FieldAccessor = "text",
    config: RelatedTopicsConfig | Mapping[str, Any] | None = None,
) -> List[RelatedTopic]:
    """Return the terms most associated with *focal_term*, best PMI first.

    The subset is every item whose text contains *focal_term*. Candidates are
    counted in that subset (the focal term itself excluded) and in the whole
    corpus; only those with at least ``min_co_occurrence`` subset occurrences
    and a strictly positive PMI are kept.
    """
    corpus = as_item_list(items)
    if not corpus or not focal_term or not isinstance(focal_term, str):
        return []

    cfg = coerce_config(config, RelatedTopicsConfig)
    getter = field_getter(text_field)
    subset = [item for item in corpus if contains_term(item_text(item, getter), focal_term)]
    if not subset:
        logger.debug("No items mention %r; nothing related", focal_term)
        return []

    subset_counts = count_terms(subset, getter, cfg.stopwords | {focal_term.lower()})
    corpus_counts = count_terms(corpus, getter, cfg.stopwords)

    related: List[RelatedTopic] = []
    for term, co_occurrence in subset_counts.items():
        if co_occurrence < cfg.min_co_occurrence:
            continue
        total = corpus_counts.get(term, 0)
        pmi = pointwise_mutual_information(co_occurrence, len(subset), total, len(corpus))
        if pmi is None or pmi <= 0:
            continue
        related.append(
            RelatedTopic(
                focal_term=focal_term,
                related_term=term,
                co_occurrence_count=co_occurrence,
                total_frequency=total,
                pmi_score=pmi,
            )
        )

    related.sort(key=lambda r: r.pmi_score, reverse=True)
    logger.debug("Found %d terms related to %r", len(related), focal_term)
    return related[: cfg.max_topics]
