"""One-call orchestration of the trending and awareness analytics."""
from __future__ import annotations

import logging
import time
from typing import Any

from .config import AnalysisConfig
from .correlation import build_topic_network, calculate_topic_correlations
from .integration import calculate_topic_phase_distribution, classify_topics_by_phase
from .models import AnalysisResult
from .phase_classifier import AwarenessPhaseClassifier
from .related import find_related_topics
from .timeseries import generate_topic_time_series
from .trending import calculate_trending_topics, coerce_config, group_topics_by_platform

logger = logging.getLogger(__name__)


def run_analysis(current: Any, previous: Any = None, config: AnalysisConfig | None = None) -> AnalysisResult:
    """Run every analysis stage over *current* (compared with *previous*).

    Nothing is cached between calls; the result is rebuilt from the inputs.
    """
    cfg = coerce_config(config, AnalysisConfig)
    start_time = time.time()

    topics = calculate_trending_topics(current, previous, cfg.text_field, cfg.trending)
    if not topics:
        logger.warning("No trending topics found; check min_frequency or the corpus")

    by_platform = group_topics_by_platform(current, topics, cfg.text_field, cfg.platform_field)

    correlations = calculate_topic_correlations(current, topics[: cfg.correlation_top_k], cfg.text_field)
    network = build_topic_network(topics[: cfg.correlation_top_k], correlations)

    related = {
        topic.term: find_related_topics(current, topic.term, cfg.text_field, cfg.related)
        for topic in topics[: cfg.related_top_k]
    }

    time_series = generate_topic_time_series(
        current, topics, cfg.text_field, cfg.date_field, cfg.time_series.interval
    )

    classifier = AwarenessPhaseClassifier()
    item_distribution = classifier.calculate_distribution(classifier.classify_items(current, cfg.text_field))

    topics_by_phase = classify_topics_by_phase(topics, current, cfg.text_field)
    topic_distribution = calculate_topic_phase_distribution(topics_by_phase)

    logger.info(
        "Analysis finished in %.2fs: %d topics, %d correlations, %d platforms",
        time.time() - start_time, len(topics), len(correlations), len(by_platform),
    )
    return AnalysisResult(
        topics=topics,
        topics_by_platform=by_platform,
        correlations=correlations,
        network=network,
        related_topics=related,
        time_series=time_series,
        item_phase_distribution=item_distribution,
        topics_by_phase=topics_by_phase,
        topic_phase_distribution=topic_distribution,
    )
