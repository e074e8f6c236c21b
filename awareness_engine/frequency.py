"""Unigram and n-gram frequency counting over a corpus."""
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable

from .text import FieldAccessor, as_item_list, build_stopwords, field_getter, item_text, split_tokens


def count_terms(
    items: Any,
    text_field: FieldAccessor = "text",
    stopwords: Iterable[str] | None = None,
) -> Dict[str, int]:
    """Return ``term -> count`` over all tokens of all *items*.

    Items with a missing or empty text field contribute nothing. Keys keep the
    order in which terms were first seen.
    """
    corpus = as_item_list(items)
    if not corpus:
        return {}

    getter = field_getter(text_field)
    stop = build_stopwords(stopwords)
    counts: Counter[str] = Counter()
    for item in corpus:
        counts.update(split_tokens(item_text(item, getter), stop))
    return dict(counts)


def extract_ngrams(
    items: Any,
    text_field: FieldAccessor = "text",
    n: int = 2,
    stopwords: Iterable[str] | None = None,
) -> Dict[str, int]:
    """Return ``phrase -> count`` for every contiguous *n*-token window.

    Windows never cross item boundaries; texts shorter than *n* tokens
    (after stopword filtering) yield nothing.
    """
    corpus = as_item_list(items)
    if not corpus or n < 2:
        return {}

    getter = field_getter(text_field)
    stop = build_stopwords(stopwords)
    counts: Counter[str] = Counter()
    for item in corpus:
        tokens = split_tokens(item_text(item, getter), stop)
        counts.update(" ".join(tokens[i:i + n]) for i in range(len(tokens) - n + 1))
    return dict(counts)
