import json
from pathlib import Path

import pytest

from awareness_engine import AnalysisConfig, TrendingConfig, run_analysis
from awareness_engine.cli import main
from awareness_engine.phase_classifier import PHASE_IDS


def test_run_analysis_end_to_end(skincare_posts) -> None:
    previous = [{"text": "handcreme"}, {"text": "koken"}]
    result = run_analysis(skincare_posts, previous)

    terms = [t.term for t in result.topics]
    # handcreme grew 1 -> 3, the rest are new; ties keep unigrams before phrases
    assert terms == ["handcreme", "droge", "huid", "droge huid"]
    assert result.topics[0].growth_percent == pytest.approx(200)
    assert all(t.frequency >= 2 for t in result.topics)

    assert set(result.topics_by_platform) == {"reddit", "instagram", "trustpilot"}
    assert [t.term for t in result.topics_by_platform["trustpilot"]] == ["handcreme"]

    assert result.correlations
    assert len(result.network.nodes) == len(result.topics)
    assert set(result.related_topics) == set(terms[:5])
    assert set(result.time_series) == set(terms)
    assert len(result.time_series["handcreme"]) == 9

    assert [d.phase_id for d in result.item_phase_distribution] == list(PHASE_IDS)
    assert sum(d.count for d in result.item_phase_distribution) == len(skincare_posts)
    assert list(result.topics_by_phase) == list(PHASE_IDS)
    assert sum(d.count for d in result.topic_phase_distribution) == len(result.topics)


def test_run_analysis_serialises_ngram_size(skincare_posts) -> None:
    config = AnalysisConfig(trending=TrendingConfig(min_frequency=3))
    payload = json.loads(run_analysis(skincare_posts, config=config).model_dump_json())
    by_term = {topic["term"]: topic for topic in payload["topics"]}
    assert by_term["droge huid"]["size"] == 2
    assert "size" not in by_term["handcreme"]


def test_run_analysis_on_empty_corpus() -> None:
    result = run_analysis([])
    assert result.topics == []
    assert result.topics_by_phase == {}
    assert result.topic_phase_distribution == []
    assert all(d.count == 0 for d in result.item_phase_distribution)


def test_cli_writes_json(tmp_path: Path, skincare_posts, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    current = tmp_path / "current.json"
    current.write_text(json.dumps(skincare_posts), encoding="utf-8")
    output = tmp_path / "out" / "result.json"

    main(["--current", str(current), "--no-ngrams", "--interval", "week", "--stopword", "Droge",
          "--output", str(output)])

    payload = json.loads(output.read_text(encoding="utf-8"))
    terms = [t["term"] for t in payload["topics"]]
    assert "droge" not in terms
    assert all(" " not in term for term in terms)
    assert len(payload["time_series"]["huid"]) == 2


def test_cli_missing_input_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--current", str(tmp_path / "missing.csv")])
    assert exc_info.value.code == 2
