"""Unit tests for sitefaq.classifier."""

from __future__ import annotations

import pytest

from sitefaq.classifier import QuestionKind, classify
from sitefaq.config import DEFAULT_SITE_KEYWORDS


def _classify(question: str) -> QuestionKind:
    return classify(question, site_keywords=DEFAULT_SITE_KEYWORDS, short_question_length=15)


class TestKeywordRule:
    def test_keyword_in_short_question(self) -> None:
        assert _classify("قیمت؟") is QuestionKind.SITE_SPECIFIC

    def test_keyword_in_long_question(self) -> None:
        assert _classify("قیمت محصول چنده؟") is QuestionKind.SITE_SPECIFIC

    def test_keyword_as_substring(self) -> None:
        # "محصول" inside "محصولات"
        assert _classify("محصولات") is QuestionKind.SITE_SPECIFIC

    @pytest.mark.parametrize("question", ["PRICE?", "Price", "price"])
    def test_keyword_case_insensitive(self, question: str) -> None:
        assert _classify(question) is QuestionKind.SITE_SPECIFIC

    def test_keyword_beats_length_rule(self) -> None:
        """A keyword wins even when the question would otherwise count as small talk."""
        result = classify("buy", site_keywords=["BUY"], short_question_length=100)
        assert result is QuestionKind.SITE_SPECIFIC


class TestLengthRule:
    def test_greeting_is_general(self) -> None:
        assert _classify("سلام") is QuestionKind.GENERAL

    def test_empty_question_is_general(self) -> None:
        assert _classify("") is QuestionKind.GENERAL

    def test_just_below_threshold_is_general(self) -> None:
        assert _classify("a" * 14) is QuestionKind.GENERAL

    def test_at_threshold_is_site_specific(self) -> None:
        assert _classify("a" * 15) is QuestionKind.SITE_SPECIFIC

    def test_long_question_without_keyword_defaults_to_site_specific(self) -> None:
        assert _classify("ساعت کاری شما از چند است؟") is QuestionKind.SITE_SPECIFIC

    def test_custom_threshold(self) -> None:
        result = classify("hello there", site_keywords=[], short_question_length=5)
        assert result is QuestionKind.SITE_SPECIFIC


def test_kind_values_match_response_type() -> None:
    assert QuestionKind.GENERAL.value == "general"
    assert QuestionKind.SITE_SPECIFIC.value == "site-specific"
