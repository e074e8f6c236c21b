"""Pairwise co-occurrence correlation between trending topics."""
from __future__ import annotations

import logging
import time
from itertools import combinations
from typing import Any, List, Mapping, Sequence

from pydantic import ValidationError

from .models import NetworkLink, NetworkNode, Topic, TopicCorrelation, TopicNetwork
from .text import FieldAccessor, as_item_list, field_getter, item_text
from .trending import coerce_topics

logger = logging.getLogger(__name__)


def jaccard_similarity(co_occurrence: int, frequency_a: int, frequency_b: int) -> float:
    """``co / (a + b - co)`` clamped to [0, 1]; 0 when the union is empty."""
    union = frequency_a + frequency_b - co_occurrence
    if union <= 0 or co_occurrence <= 0:
        return 0.0
    return min(1.0, co_occurrence / union)


def calculate_topic_correlations(
    items: Any,
    topics: Sequence[Topic],
    text_field: FieldAccessor = "text",
) -> List[TopicCorrelation]:
    """Correlate every unordered pair of *topics* by Jaccard co-occurrence.

    Two topics co-occur in an item when both terms appear in its text as
    case-insensitive substrings. Pairs that never co-occur are dropped and
    the rest are sorted by descending Jaccard score. Cost is O(K² · N).
    """
    corpus = as_item_list(items)
    candidates = coerce_topics(topics)
    if not corpus or len(candidates) < 2:
        return []

    start_time = time.time()
    getter = field_getter(text_field)
    texts = [item_text(item, getter).lower() for item in corpus]
    # item indices containing each term
    presence = {
        topic.term: {idx for idx, text in enumerate(texts) if topic.term.lower() in text}
        for topic in candidates
    }

    correlations: List[TopicCorrelation] = []
    for topic_a, topic_b in combinations(candidates, 2):
        co_occurrence = len(presence[topic_a.term] & presence[topic_b.term])
        if co_occurrence == 0:
            continue
        correlations.append(
            TopicCorrelation(
                term_a=topic_a.term,
                term_b=topic_b.term,
                co_occurrence_count=co_occurrence,
                jaccard_score=jaccard_similarity(co_occurrence, topic_a.frequency, topic_b.frequency),
            )
        )

    correlations.sort(key=lambda c: c.jaccard_score, reverse=True)
    logger.info(
        "Correlated %d topics into %d co-occurring pairs in %.2fs",
        len(candidates), len(correlations), time.time() - start_time,
    )
    return correlations


def coerce_correlations(correlations: Any) -> List[TopicCorrelation]:
    """Validate correlations given as models or plain mappings; skip malformed ones."""
    result: List[TopicCorrelation] = []
    for entry in as_item_list(correlations):
        if isinstance(entry, TopicCorrelation):
            result.append(entry)
            continue
        if not isinstance(entry, Mapping):
            logger.debug("Skipping correlation of unsupported type %s", type(entry).__name__)
            continue
        try:
            result.append(TopicCorrelation.model_validate(entry))
        except ValidationError as exc:
            logger.debug("Skipping malformed correlation %r: %s", entry, exc)
    return result


def build_topic_network(topics: Sequence[Topic], correlations: Sequence[TopicCorrelation]) -> TopicNetwork:
    """Turn topics and their correlations into a node/link graph."""
    nodes = [
        NetworkNode(
            id=topic.term,
            label=topic.term,
            value=topic.frequency,
            score=topic.trending_score,
            is_new=topic.is_new,
        )
        for topic in coerce_topics(topics)
    ]
    links = [
        NetworkLink(source=c.term_a, target=c.term_b, value=c.jaccard_score)
        for c in coerce_correlations(correlations)
    ]
    return TopicNetwork(nodes=nodes, links=links)
