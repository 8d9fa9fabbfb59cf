import hashlib
import re
from collections import Counter
from typing import Dict

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string (UTF-8 bytes, lowercase hex)"""
    # surrogatepass keeps lone surrogates hashable and distinct from each other
    return hashlib.sha256(text.encode("utf-8", "surrogatepass")).hexdigest()


def normalize_for_palindrome(text: str) -> str:
    """Lowercase and drop every character outside [a-z0-9]"""
    return _NON_ALNUM.sub("", text.lower())


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case- and punctuation-insensitive)"""
    cleaned = normalize_for_palindrome(text)
    return cleaned == cleaned[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by whitespace"""
    # str.split() with no argument trims and collapses runs of whitespace
    return len(text.split())


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))


def analyze_string(value: str) -> Dict:
    """Analyze a string and return all computed properties"""
    sha256_hash = compute_sha256(value)

    return {
        "id": sha256_hash,
        "value": value,
        "length": len(value),
        "is_palindrome": is_palindrome(value),
        "unique_characters": count_unique_characters(value),
        "word_count": count_words(value),
        "sha256_hash": sha256_hash,
        "character_frequency_map": get_character_frequency(value)
    }
