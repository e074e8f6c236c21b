"""Assign each trending topic the awareness phase of the items that mention it."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Sequence

from .models import PhaseDistribution, Topic, TopicPhaseAssignment
from .phase_classifier import PHASE_IDS, calculate_phase_distribution, classify_awareness_phase, pick_dominant_phase
from .text import FieldAccessor, as_item_list, field_getter, item_text
from .trending import coerce_topics

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.5


def assign_topic_phase(topic: Topic, texts: Sequence[str]) -> TopicPhaseAssignment:
    """Dominant phase of one topic over the (lowercased) corpus *texts*."""
    term = topic.term.lower()
    matching = [text for text in texts if term in text]

    if not matching:
        # nothing mentions the term, classify the term itself
        return TopicPhaseAssignment(
            term=topic.term,
            phase_id=classify_awareness_phase(topic.term),
            confidence=FALLBACK_CONFIDENCE,
            matched_item_count=None,
            low_confidence=True,
        )

    tally = {phase_id: 0 for phase_id in PHASE_IDS}
    for text in matching:
        tally[classify_awareness_phase(text)] += 1
    dominant = pick_dominant_phase(tally)
    return TopicPhaseAssignment(
        term=topic.term,
        phase_id=dominant,
        confidence=tally[dominant] / len(matching),
        matched_item_count=len(matching),
    )


def classify_topics_by_phase(
    topics: Sequence[Topic],
    items: Any,
    text_field: FieldAccessor = "text",
) -> Dict[str, List[TopicPhaseAssignment]]:
    """Group trending *topics* by their dominant awareness phase.

    Returns all five phase ids as keys, or ``{}`` when either input is empty.
    Within a phase, assignments keep the ranking order of *topics*.
    """
    ranked = coerce_topics(topics)
    corpus = as_item_list(items)
    if not ranked or not corpus:
        return {}

    start_time = time.time()
    getter = field_getter(text_field)
    texts = [item_text(item, getter).lower() for item in corpus]

    by_phase: Dict[str, List[TopicPhaseAssignment]] = {phase_id: [] for phase_id in PHASE_IDS}
    fallbacks = 0
    for topic in ranked:
        assignment = assign_topic_phase(topic, texts)
        fallbacks += assignment.low_confidence
        by_phase[assignment.phase_id].append(assignment)

    if fallbacks:
        logger.debug("%d topics classified from the term alone (low confidence)", fallbacks)
    logger.info("Assigned %d topics to awareness phases in %.2fs", len(ranked), time.time() - start_time)
    return by_phase


def calculate_topic_phase_distribution(
    topics_by_phase: Mapping[str, Sequence[TopicPhaseAssignment]] | None,
) -> List[PhaseDistribution]:
    """Per-phase topic counts and percentages, ordered by phase ordinal."""
    if not topics_by_phase:
        return []
    return calculate_phase_distribution(
        {phase_id: len(topics_by_phase.get(phase_id) or []) for phase_id in PHASE_IDS}
    )
