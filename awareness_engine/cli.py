#!/usr/bin/env python3
"""Console entry point: ``awareness-analyze``.

Loads a current (and optionally a previous-period) corpus export, runs the
full trending + awareness analysis and writes the result as JSON.

Usage
-----
awareness-analyze --current posts_week42.csv --previous posts_week41.csv
awareness-analyze --current reviews.jsonl --interval week --output result.json

Option defaults come from ``AWARENESS_*`` environment variables (``.env`` is
honoured), flags override them.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .config import AnalysisConfig, load_config_from_env
from .corpus_loader import load_text_items
from .pipeline import run_analysis

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find trending topics and their awareness phase in a text corpus")
    parser.add_argument("--current", required=True, type=Path, help="Current-period corpus (.csv/.json/.jsonl)")
    parser.add_argument("--previous", type=Path, help="Previous-period corpus for growth comparison")
    parser.add_argument("--text-field", default="text", help="Column holding the text")
    parser.add_argument("--platform-field", default="platform", help="Column holding the platform")
    parser.add_argument("--date-field", default="timestamp", help="Column holding the timestamp")
    parser.add_argument("--min-frequency", type=int, help="Drop terms seen fewer times (default 2)")
    parser.add_argument("--max-topics", type=int, help="Maximum number of trending topics (default 50)")
    parser.add_argument(
        "--no-ngrams",
        dest="include_ngrams",
        action="store_false",
        default=None,
        help="Score single words only",
    )
    parser.add_argument("--ngram-size", type=int, help="Phrase length for n-grams (default 2)")
    parser.add_argument("--interval", choices=["day", "week", "month"], help="Time-series granularity")
    parser.add_argument(
        "--stopword",
        dest="stopwords",
        action="append",
        default=None,
        help="Extra stopword (repeatable)",
    )
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout")
    parser.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, ...)")
    return parser


def _build_config(args: argparse.Namespace) -> AnalysisConfig:
    """Layer CLI flags over the environment defaults.

    Field-name flags only steer the loader; loaded items are TextItem models
    so the analysis always reads the canonical attributes.
    """
    base = load_config_from_env(
        trending={
            "min_frequency": args.min_frequency,
            "max_topics": args.max_topics,
            "include_ngrams": args.include_ngrams,
            "ngram_size": args.ngram_size,
        },
        time_series={"interval": args.interval},
    )
    if args.stopwords:
        extra = {word.lower() for word in args.stopwords}
        base = base.model_copy(
            update={
                "trending": base.trending.model_copy(update={"stopwords": base.trending.stopwords | extra}),
                "related": base.related.model_copy(update={"stopwords": base.related.stopwords | extra}),
            }
        )
    return base


def main(argv: Optional[List[str]] = None) -> None:
    """Entry-point for the trending + awareness analysis."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s | %(levelname)s | %(message)s")

    try:
        config = _build_config(args)
        fields = dict(text_field=args.text_field, platform_field=args.platform_field, date_field=args.date_field)
        current = load_text_items(args.current, **fields)
        previous = load_text_items(args.previous, **fields) if args.previous else []
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        LOGGER.error("Could not start analysis: %s", exc)
        sys.exit(2)

    LOGGER.info("🚀 Analysing %d current items against %d previous items", len(current), len(previous))
    result = run_analysis(current, previous, config)

    payload = result.model_dump_json(indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload, encoding="utf-8")
        LOGGER.info("🎉 Wrote analysis to %s", args.output)
    else:
        sys.stdout.write(payload + "\n")


if __name__ == "__main__":
    main()
