# tests/test_token_filters.py

import pytest

from content_recommender.domain.models import Morpheme
from content_recommender.domain.options import TokenFilterOptions
from content_recommender.infrastructure.token_filters import (
    EnglishTokenFilter,
    JapaneseTokenFilter,
)


# ── English ───────────────────────────────────────────────────────────────────

def test_removes_stopwords_and_duplicates_keeping_first_seen_order():
    token_filter = EnglishTokenFilter()
    tokens = ["machin", "the", "learn", "and", "machin", "model"]

    assert token_filter.filter(tokens) == ["machin", "learn", "model"]


def test_stopwords_are_matched_verbatim():
    # stems of stopwords ("was" -> "wa", "any" -> "ani") can be content words
    token_filter = EnglishTokenFilter()

    assert token_filter.filter(["was", "any", "wa", "ani", "doe"]) == ["wa", "ani", "doe"]
    assert "ani" not in token_filter.stopwords


def test_min_token_length_drops_short_tokens():
    token_filter = EnglishTokenFilter(TokenFilterOptions(min_token_length=3))
    assert token_filter.filter(["ai", "ml", "python", "vs"]) == ["python"]


def test_custom_stop_words_extend_the_default_list():
    token_filter = EnglishTokenFilter(TokenFilterOptions(custom_stop_words=("python",)))

    assert "python" in token_filter.stopwords
    assert token_filter.filter(["python", "the", "javascript"]) == ["javascript"]


def test_disabling_stopword_removal_keeps_stopwords():
    token_filter = EnglishTokenFilter(TokenFilterOptions(remove_stopwords=False))
    assert token_filter.filter(["the", "trend"]) == ["the", "trend"]


def test_disabling_duplicate_removal_keeps_repeats():
    token_filter = EnglishTokenFilter(TokenFilterOptions(remove_duplicates=False))
    assert token_filter.filter(["machin", "machin"]) == ["machin", "machin"]


def test_empty_input_yields_empty_output():
    assert EnglishTokenFilter().filter([]) == []


def test_ngram_with_a_stopword_part_is_dropped():
    token_filter = EnglishTokenFilter()
    tokens = ["trend", "javascript", "trend_for", "for_javascript", "trend_for_javascript",
              "machin_learn"]

    assert token_filter.filter_with_ngrams(tokens) == ["trend", "javascript", "machin_learn"]


def test_ngram_filtering_respects_disabled_stopwords():
    token_filter = EnglishTokenFilter(TokenFilterOptions(remove_stopwords=False))
    assert token_filter.filter_with_ngrams(["the_trend"]) == ["the_trend"]


def test_ngram_filtering_applies_length_and_duplicates():
    token_filter = EnglishTokenFilter(TokenFilterOptions(min_token_length=4))
    tokens = ["ai", "learn", "learn", "machin_learn"]

    assert token_filter.filter_with_ngrams(tokens) == ["learn", "machin_learn"]


# ── Japanese ──────────────────────────────────────────────────────────────────

def _morpheme(pos, surface, basic=None):
    return Morpheme(pos=pos, surface_form=surface, basic_form=basic)


def test_pos_filter_keeps_allowed_parts_of_speech_in_base_form():
    morphemes = [
        _morpheme("名詞", "プログラミング", "プログラミング"),
        _morpheme("助詞", "は", "は"),
        _morpheme("形容詞", "楽しい", "楽しい"),
        _morpheme("助動詞", "です", "です"),
        _morpheme("動詞", "走り", "走る"),
    ]

    assert JapaneseTokenFilter().filter_with_pos(morphemes) == ["プログラミング", "楽しい", "走る"]


def test_pos_filter_falls_back_to_surface_when_base_form_is_unknown():
    morphemes = [_morpheme("名詞", "JavaScript", "*"), _morpheme("名詞", "Python")]
    assert JapaneseTokenFilter().filter_with_pos(morphemes) == ["JavaScript", "Python"]


def test_pos_filter_drops_single_hiragana():
    morphemes = [_morpheme("動詞", "い", "い"), _morpheme("名詞", "ねこ", "ねこ")]
    assert JapaneseTokenFilter().filter_with_pos(morphemes) == ["ねこ"]


def test_pos_filter_honours_custom_allowed_pos():
    options = TokenFilterOptions(allowed_pos=("名詞",))
    morphemes = [_morpheme("名詞", "勉強", "勉強"), _morpheme("動詞", "走り", "走る")]

    assert JapaneseTokenFilter(options).filter_with_pos(morphemes) == ["勉強"]


def test_pos_filter_removes_stopwords_and_duplicates():
    morphemes = [
        _morpheme("名詞", "こと", "こと"),
        _morpheme("名詞", "勉強", "勉強"),
        _morpheme("名詞", "勉強", "勉強"),
    ]
    assert JapaneseTokenFilter().filter_with_pos(morphemes) == ["勉強"]


def test_pos_filter_applies_min_token_length():
    options = TokenFilterOptions(min_token_length=3)
    morphemes = [_morpheme("名詞", "勉強", "勉強"), _morpheme("名詞", "プログラム", "プログラム")]

    assert JapaneseTokenFilter(options).filter_with_pos(morphemes) == ["プログラム"]


def test_japanese_plain_filter_uses_japanese_stopwords():
    assert JapaneseTokenFilter().filter(["こと", "勉強", "から"]) == ["勉強"]


@pytest.mark.parametrize("token_filter_cls", [EnglishTokenFilter, JapaneseTokenFilter])
def test_filters_expose_their_options(token_filter_cls):
    options = TokenFilterOptions(min_token_length=2)
    assert token_filter_cls(options).options is options
