"""Tests for word selection policies and vocabulary lookups."""

from __future__ import annotations

import pytest

from accesshtml.alttext import vocabulary as vocab
from accesshtml.alttext.selection import FirstWord, RandomWord, ShortestWord, WordSelector, make_selector


class TestSelectors:
    def test_first(self) -> None:
        assert FirstWord().select(["物", "商品"]) == "物"

    def test_shortest_keeps_earliest_on_tie(self) -> None:
        assert ShortestWord().select(["abc", "de", "fg"]) == "de"

    def test_empty_returns_none(self) -> None:
        for selector in (FirstWord(), ShortestWord(), RandomWord(1)):
            assert selector.select([]) is None

    def test_seeded_random_is_reproducible(self) -> None:
        words = ["a", "b", "c", "d", "e", "f"]
        first = [RandomWord(7).select(words) for _ in range(3)]
        second = [RandomWord(7).select(words) for _ in range(3)]
        assert first == second
        assert all(w in words for w in first)

    def test_make_selector(self) -> None:
        assert isinstance(make_selector("first"), FirstWord)
        assert isinstance(make_selector("shortest"), ShortestWord)
        assert isinstance(make_selector("random", seed=1), RandomWord)
        assert isinstance(make_selector("first"), WordSelector)

    def test_make_selector_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown word selection"):
            make_selector("loudest")


class TestVocabulary:
    def test_resolve_language(self) -> None:
        assert vocab.resolve_language("ja-JP") == "ja"
        assert vocab.resolve_language("vi") == "vi"
        assert vocab.resolve_language("fr") == "en"

    def test_words_lookup(self) -> None:
        assert vocab.words("ja", "types", "object")[0] == "物"
        assert vocab.words("en", "types", "missing") == []

    def test_unspaced(self) -> None:
        assert vocab.is_unspaced("ja") is True
        assert vocab.is_unspaced("en") is False

    def test_safe_defaults_are_not_forbidden(self) -> None:
        for word in vocab.SAFE_DEFAULT.values():
            assert not any(f in word.lower() for f in vocab.FORBIDDEN_WORDS)

    def test_every_language_has_phrases(self) -> None:
        assert set(vocab.PHRASES) == set(vocab.VOCABULARY)
