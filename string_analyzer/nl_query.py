import logging
import re

from string_analyzer.errors import UnsatisfiableFilterError, ValidationError
from string_analyzer.filters import PredicateSet

logger = logging.getLogger(__name__)

LONGER_THAN = re.compile(r"longer than\s+(\d+)")
SHORTER_THAN = re.compile(r"shorter than\s+(\d+)")
# The captured character must stand alone, so "contains letter z" yields "z"
CONTAINS_CHARACTER = re.compile(r"(?:contains|letter)\s+([a-z0-9])\b")


def _to_int(digits: str, phrase: str) -> int:
    try:
        return int(digits)
    except ValueError:
        raise ValidationError(f"Number after \"{phrase}\" is too large", field="query")


def parse_natural_language_query(query: str) -> PredicateSet:
    """
    Parse natural language query into filter parameters.

    Fixed rules, applied in order; a later rule overwrites a field set by
    an earlier one. Examples:
    - "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
    - "strings longer than 10 characters" -> {min_length: 11}
    - "strings containing the letter z" -> {contains_character: "z"}

    Raises UnsatisfiableFilterError when both bounds are set and
    min_length > max_length.
    """
    query = query.lower()
    filters = {}

    # Check for palindrome
    if "palindrome" in query or "palindromic" in query:
        filters["is_palindrome"] = True

    # Check for single word / one word
    if "single word" in query or "one word" in query:
        filters["word_count"] = 1

    # "longer than N" excludes N itself
    length_match = LONGER_THAN.search(query)
    if length_match:
        filters["min_length"] = _to_int(length_match.group(1), "longer than") + 1

    length_match = SHORTER_THAN.search(query)
    if length_match:
        filters["max_length"] = _to_int(length_match.group(1), "shorter than") - 1

    letter_match = CONTAINS_CHARACTER.search(query)
    if letter_match:
        filters["contains_character"] = letter_match.group(1)

    # Fixed heuristic, not vowel detection
    if "first vowel" in query:
        filters["contains_character"] = "a"

    min_length = filters.get("min_length")
    max_length = filters.get("max_length")
    if min_length is not None and max_length is not None and min_length > max_length:
        logger.warning(f"Conflicting length filters parsed from {query!r}: {filters}")
        raise UnsatisfiableFilterError("Query parsed but resulted in conflicting length filters")

    return PredicateSet(**filters)
