from awareness_engine.frequency import count_terms, extract_ngrams


def test_count_terms_over_all_items() -> None:
    items = [{"text": "koken koken bakken"}, {"text": "Koken!"}]
    assert count_terms(items) == {"koken": 3, "bakken": 1}


def test_count_terms_skips_missing_text() -> None:
    items = [{"text": None}, {"other": "grillen"}, {"text": ""}, {"text": "koken"}]
    assert count_terms(items) == {"koken": 1}


def test_count_terms_with_accessor_and_stopwords() -> None:
    items = [{"body": "koken bakken"}, {"body": "bakken"}]
    assert count_terms(items, text_field=lambda i: i["body"], stopwords={"koken"}) == {"bakken": 2}


def test_count_terms_is_total() -> None:
    assert count_terms(None) == {}
    assert count_terms([]) == {}
    assert count_terms("koken") == {}


def test_extract_bigrams() -> None:
    items = [{"text": "lekker koken thuis"}, {"text": "lekker koken"}]
    assert extract_ngrams(items, n=2) == {"lekker koken": 2, "koken thuis": 1}


def test_extract_trigrams() -> None:
    items = [{"text": "lekker koken thuis vandaag"}]
    assert extract_ngrams(items, n=3) == {"lekker koken thuis": 1, "koken thuis vandaag": 1}


def test_ngrams_never_cross_items() -> None:
    assert extract_ngrams([{"text": "lekker"}, {"text": "koken"}], n=2) == {}


def test_short_texts_and_invalid_n_yield_nothing() -> None:
    assert extract_ngrams([{"text": "koken"}], n=2) == {}
    assert extract_ngrams([{"text": "lekker koken"}], n=1) == {}
    assert extract_ngrams(None, n=2) == {}
