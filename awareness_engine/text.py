"""Tokenization, stopword handling and record field access."""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, Callable, FrozenSet, List, Union

FieldAccessor = Union[str, Callable[[Any], Any]]

# Dutch + English function words; tokens of <= 2 characters are dropped anyway.
DEFAULT_STOPWORDS: FrozenSet[str] = frozenset({
    # Dutch
    "de", "het", "een", "en", "in", "is", "dat", "op", "te", "van", "voor", "met", "zijn", "er", "aan",
    "niet", "ook", "maar", "dan", "dus", "als", "nog", "al", "bij", "zo", "toch", "wel", "naar", "ja",
    "nee", "hoe", "wat", "wie", "waar", "wanneer", "waarom", "kan", "kunnen", "zal", "zullen", "moet",
    "moeten", "mogen", "mag",
    # English
    "the", "a", "an", "and", "that", "on", "to", "of", "for", "with", "are", "there", "not", "also",
    "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you", "your", "yours", "yourself",
    "yourselves", "he", "him", "his", "himself", "she", "her", "hers", "herself", "it", "its", "itself",
    "they", "them", "their", "theirs", "themselves", "what", "which", "who", "whom", "this", "these",
    "those", "am", "was", "were", "be", "been", "being", "have", "has", "had", "having", "do", "does",
    "did", "doing", "would", "should", "could", "ought", "cannot", "because", "while", "about",
    "against", "between", "into", "through", "during", "before", "after", "above", "below", "from",
    "up", "down", "out", "over", "under", "again", "further", "then", "once", "here", "when", "where",
    "why", "how", "all", "any", "both", "each", "few", "more", "most", "other", "some", "such", "no",
    "nor", "only", "own", "same", "so", "than", "too", "very", "s", "t", "just", "now",
    # English contractions as they look once the apostrophe is stripped;
    # ambiguous ones ("well", "shed", "ill") are left out
    "youre", "theyre", "youve", "weve", "theyve", "youd", "theyd", "youll", "theyll", "isnt", "arent",
    "wasnt", "werent", "hasnt", "havent", "hadnt", "doesnt", "dont", "didnt", "wont", "wouldnt",
    "shant", "shouldnt", "cant", "couldnt", "mustnt", "lets", "thats", "whos", "whats", "heres",
    "theres", "whens", "wheres", "whys", "hows",
})

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
MIN_TOKEN_LENGTH = 3


def build_stopwords(extra: Iterable[str] | None = None) -> FrozenSet[str]:
    """Return the default stopwords unioned with *extra* (lowercased)."""
    if not extra:
        return DEFAULT_STOPWORDS
    if isinstance(extra, str):
        extra = [extra]
    return DEFAULT_STOPWORDS | {str(word).lower() for word in extra if word}


def tokenize(text: Any, stopwords: Iterable[str] | None = None) -> List[str]:
    """Lowercase *text*, strip punctuation and drop short tokens and stopwords.

    ``stopwords`` are extra exclusions on top of :data:`DEFAULT_STOPWORDS`.
    """
    return split_tokens(text, build_stopwords(stopwords))


def split_tokens(text: Any, stopwords: FrozenSet[str]) -> List[str]:
    """Tokenize against a stopword set that has already been built."""
    if not text or not isinstance(text, str):
        return []
    cleaned = _PUNCTUATION_RE.sub("", text.lower())
    return [tok for tok in cleaned.split() if len(tok) >= MIN_TOKEN_LENGTH and tok not in stopwords]


def field_getter(field: FieldAccessor) -> Callable[[Any], Any]:
    """Turn a field name (or an existing callable) into an ``item -> value`` accessor.

    Mappings are read with ``.get`` and any other object with ``getattr`` so the
    analytics work on plain dicts, pandas row dicts and :class:`TextItem` alike.
    """
    if callable(field):
        return field

    def _get(item: Any) -> Any:
        if isinstance(item, Mapping):
            return item.get(field)
        return getattr(item, field, None)

    return _get


def item_text(item: Any, getter: Callable[[Any], Any]) -> str:
    """Return the text of *item* or ``""`` when missing or not a string."""
    value = getter(item)
    return value if isinstance(value, str) else ""


def contains_term(text: str, term: str) -> bool:
    """Case-insensitive substring test used for topic/item matching."""
    if not text or not term:
        return False
    return term.lower() in text.lower()


def as_item_list(items: Any) -> List[Any]:
    """Return *items* as a list, or ``[]`` for ``None``/strings/non-iterables."""
    if items is None or isinstance(items, (str, bytes, Mapping)):
        return []
    try:
        return list(items)
    except TypeError:
        return []
