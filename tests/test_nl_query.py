"""Tests for the rule-based natural-language filter parser."""

import sys

import pytest

from string_analyzer.errors import UnsatisfiableFilterError, ValidationError
from string_analyzer.nl_query import parse_natural_language_query


def parse(query):
    return parse_natural_language_query(query).applied()


def test_palindromic_longer_than():
    assert parse("palindromic strings longer than 3") == {"is_palindrome": True, "min_length": 4}


def test_palindrome_word():
    assert parse("show me a Palindrome") == {"is_palindrome": True}


def test_single_word_palindromic():
    assert parse("all single word palindromic strings") == {"is_palindrome": True, "word_count": 1}


def test_one_word():
    assert parse("one word strings") == {"word_count": 1}


def test_shorter_than():
    assert parse("strings shorter than 10 characters") == {"max_length": 9}


def test_contains_letter():
    assert parse("contains letter z") == {"contains_character": "z"}


def test_containing_the_letter():
    assert parse("strings containing the letter q") == {"contains_character": "q"}


def test_contains_digit():
    assert parse("contains 7") == {"contains_character": "7"}


def test_first_vowel_overrides_letter():
    assert parse("palindromic strings that contain the first vowel") == {
        "is_palindrome": True,
        "contains_character": "a",
    }
    assert parse("letter z or the first vowel") == {"contains_character": "a"}


def test_no_rule_matches():
    assert parse("show me everything") == {}


def test_unsatisfiable_range():
    with pytest.raises(UnsatisfiableFilterError):
        parse_natural_language_query("longer than 10 and shorter than 5")


def test_touching_range_is_allowed():
    # longer than 3 -> 4, shorter than 5 -> 4
    assert parse("longer than 3 and shorter than 5") == {"min_length": 4, "max_length": 4}


def test_conflict_check_is_narrow():
    # Only min/max are cross-checked; other impossible combinations pass through
    assert parse("single word longer than 100") == {"word_count": 1, "min_length": 101}


@pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="int() digit limit needs Python 3.11+")
@pytest.mark.parametrize("query", ["longer than " + "9" * 5000, "shorter than " + "9" * 5000])
def test_oversized_number_rejected(query):
    with pytest.raises(ValidationError) as exc_info:
        parse_natural_language_query(query)
    assert exc_info.value.status_code == 400
    assert exc_info.value.field == "query"
