"""Topic Awareness Engine.

Lightweight analytics package that ranks trending terms/phrases in a corpus of
social posts and reviews, relates them to each other and tags each with the
marketing-funnel awareness phase of the texts that mention it.
"""

from .config import AnalysisConfig, RelatedTopicsConfig, TimeSeriesConfig, TrendingConfig, load_config_from_env
from .correlation import build_topic_network, calculate_topic_correlations
from .frequency import count_terms, extract_ngrams
from .integration import calculate_topic_phase_distribution, classify_topics_by_phase
from .models import (
    AnalysisResult,
    AwarenessPhase,
    NGram,
    PhaseDistribution,
    RelatedTopic,
    TextItem,
    TimeSeriesPoint,
    Topic,
    TopicCorrelation,
    TopicNetwork,
    TopicPhaseAssignment,
)
from .phase_classifier import AWARENESS_PHASES, AwarenessPhaseClassifier, classify_awareness_phase
from .pipeline import run_analysis
from .related import find_related_topics
from .text import tokenize
from .timeseries import generate_topic_time_series
from .trending import calculate_trending_topics, group_topics_by_platform

__all__ = [
    "AWARENESS_PHASES",
    "AnalysisConfig",
    "AnalysisResult",
    "AwarenessPhase",
    "AwarenessPhaseClassifier",
    "NGram",
    "PhaseDistribution",
    "RelatedTopic",
    "RelatedTopicsConfig",
    "TextItem",
    "TimeSeriesConfig",
    "TimeSeriesPoint",
    "Topic",
    "TopicCorrelation",
    "TopicNetwork",
    "TopicPhaseAssignment",
    "TrendingConfig",
    "build_topic_network",
    "calculate_topic_correlations",
    "calculate_topic_phase_distribution",
    "calculate_trending_topics",
    "classify_awareness_phase",
    "classify_topics_by_phase",
    "count_terms",
    "extract_ngrams",
    "find_related_topics",
    "generate_topic_time_series",
    "group_topics_by_platform",
    "load_config_from_env",
    "run_analysis",
    "tokenize",
]

__version__ = "0.1.0"
