"""Pydantic data models shared by the analytics modules."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Tuple

from pydantic import BaseModel, Field, SerializeAsAny


class TextItem(BaseModel):
    """A single timestamped post or review supplied by the caller."""

    id: str | None = Field(None, description="Source identifier of the record")
    text: str = Field("", description="Free text of the post/review")
    platform: str | None = Field(None, description="Origin platform, e.g. 'reddit'")
    timestamp: datetime | None = Field(None, description="Publication time")
    sentiment: float | None = Field(None, description="Optional upstream sentiment score")

    model_config = {
        "frozen": True,
    }


class Topic(BaseModel):
    """A term ranked by the trending scorer."""

    term: str = Field(..., description="Unigram or phrase")
    frequency: int = Field(..., ge=0, description="Occurrences in the current corpus")
    previous_frequency: int = Field(0, ge=0, description="Occurrences in the previous corpus")
    growth_percent: float = Field(0.0, description="Period-over-period growth in percent")
    trending_score: float = Field(0.0, description="0.7 * frequency + 0.3 * growth")
    is_new: bool = Field(False, description="Absent from the previous corpus and seen more than once")

    model_config = {
        "frozen": True,
    }


class NGram(Topic):
    """Trending topic whose term is a multi-token phrase."""

    size: int = Field(2, ge=2, description="Number of tokens in the phrase")


class TopicCorrelation(BaseModel):
    """Jaccard co-occurrence between two topics."""

    term_a: str
    term_b: str
    co_occurrence_count: int = Field(..., ge=0)
    jaccard_score: float = Field(..., ge=0.0, le=1.0)

    model_config = {
        "frozen": True,
    }


class RelatedTopic(BaseModel):
    """A term associated with a focal topic by pointwise mutual information."""

    focal_term: str
    related_term: str
    co_occurrence_count: int = Field(..., ge=0)
    total_frequency: int = Field(..., ge=0)
    pmi_score: float = Field(..., gt=0.0)

    model_config = {
        "frozen": True,
    }


class TimeSeriesPoint(BaseModel):
    """Occurrence count of a term within one period."""

    term: str
    period_label: str = Field(..., description="ISO date of the period start")
    count: int = Field(0, ge=0)

    model_config = {
        "frozen": True,
    }


class AwarenessPhase(BaseModel):
    """One of the five buying-journey awareness stages."""

    id: str
    name: str
    description: str
    ordinal: int = Field(..., ge=0, le=4)
    lexicon: Tuple[str, ...] = ()

    model_config = {
        "frozen": True,
    }


class TopicPhaseAssignment(BaseModel):
    """Dominant awareness phase of a trending topic."""

    term: str
    phase_id: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    matched_item_count: int | None = Field(None, ge=0, description="None when classified from the term alone")
    low_confidence: bool = False

    model_config = {
        "frozen": True,
    }


class PhaseDistribution(BaseModel):
    """Share of items (or topics) that landed in one phase."""

    phase_id: str
    name: str
    count: int = Field(0, ge=0)
    percentage: float = Field(0.0, ge=0.0, le=100.0)

    model_config = {
        "frozen": True,
    }


class NetworkNode(BaseModel):
    id: str
    label: str
    value: int
    score: float
    is_new: bool = False

    model_config = {
        "frozen": True,
    }


class NetworkLink(BaseModel):
    source: str
    target: str
    value: float

    model_config = {
        "frozen": True,
    }


class TopicNetwork(BaseModel):
    """Node/link view of topics and their correlations."""

    nodes: List[NetworkNode] = Field(default_factory=list)
    links: List[NetworkLink] = Field(default_factory=list)

    model_config = {
        "frozen": True,
    }


class AnalysisResult(BaseModel):
    """Everything a single pipeline run produces."""

    topics: List[SerializeAsAny[Topic]] = Field(default_factory=list)
    topics_by_platform: Dict[str, List[SerializeAsAny[Topic]]] = Field(default_factory=dict)
    correlations: List[TopicCorrelation] = Field(default_factory=list)
    network: TopicNetwork = Field(default_factory=TopicNetwork)
    related_topics: Dict[str, List[RelatedTopic]] = Field(default_factory=dict)
    time_series: Dict[str, List[TimeSeriesPoint]] = Field(default_factory=dict)
    item_phase_distribution: List[PhaseDistribution] = Field(default_factory=list)
    topics_by_phase: Dict[str, List[TopicPhaseAssignment]] = Field(default_factory=dict)
    topic_phase_distribution: List[PhaseDistribution] = Field(default_factory=list)

    model_config = {
        "frozen": True,
    }
