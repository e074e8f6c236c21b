import math

import pytest

from awareness_engine.config import RelatedTopicsConfig
from awareness_engine.related import find_related_topics, pointwise_mutual_information

CORPUS = [
    {"text": "koken met verse kruiden"},
    {"text": "koken met verse pasta"},
    {"text": "verse vis op de markt"},
    {"text": "pasta bakken"},
]


def test_pointwise_mutual_information() -> None:
    assert pointwise_mutual_information(1, 2, 1, 4) == pytest.approx(2.0)
    assert pointwise_mutual_information(2, 2, 3, 4) == pytest.approx(math.log2(8 / 3))
    assert pointwise_mutual_information(1, 1, 1, 1) == pytest.approx(0.0)


@pytest.mark.parametrize("args", [(0, 2, 1, 4), (1, 0, 1, 4), (1, 2, 0, 4), (1, 2, 1, 0)])
def test_pointwise_mutual_information_undefined(args) -> None:
    assert pointwise_mutual_information(*args) is None


def test_related_terms_sorted_by_pmi() -> None:
    related = find_related_topics(CORPUS, "koken", config={"min_co_occurrence": 1})

    assert [r.related_term for r in related] == ["kruiden", "verse", "pasta"]
    kruiden, verse, pasta = related
    assert kruiden.pmi_score == pytest.approx(2.0)
    assert verse.pmi_score == pytest.approx(math.log2(8 / 3))
    assert verse.co_occurrence_count == 2
    assert verse.total_frequency == 3
    assert pasta.pmi_score == pytest.approx(1.0)
    assert all(r.focal_term == "koken" for r in related)


def test_focal_term_never_relates_to_itself() -> None:
    related = find_related_topics(CORPUS, "Koken", config=RelatedTopicsConfig(min_co_occurrence=1))
    assert "koken" not in {r.related_term for r in related}


def test_default_min_co_occurrence_and_max_topics() -> None:
    related = find_related_topics(CORPUS, "koken")
    assert [r.related_term for r in related] == ["verse"]

    capped = find_related_topics(CORPUS, "koken", config={"min_co_occurrence": 1, "max_topics": 1})
    assert [r.related_term for r in capped] == ["kruiden"]


def test_no_positive_association_returns_empty() -> None:
    # every item mentions the focal term, so PMI is 0 for all candidates
    assert find_related_topics([{"text": "koken thuis"}] * 2, "koken", config={"min_co_occurrence": 1}) == []


def test_missing_focal_term_or_corpus() -> None:
    assert find_related_topics(CORPUS, "") == []
    assert find_related_topics(CORPUS, None) == []
    assert find_related_topics(CORPUS, "zeilen") == []
    assert find_related_topics([], "koken") == []
