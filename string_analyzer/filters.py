from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import logging

from pydantic import BaseModel

from string_analyzer import schemas

logger = logging.getLogger(__name__)


class PredicateSet(BaseModel):
    """Sparse set of filter constraints, combined with AND."""
    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def applied(self) -> Dict[str, Any]:
        """Only the constraints that are actually set"""
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True)
class FilterValidationError:
    """Why a query parameter was rejected."""
    field: str
    message: str


def _parse_non_negative_int(raw: str) -> Optional[int]:
    if not raw.isdigit() or not raw.isascii():
        return None
    try:
        return int(raw)
    except ValueError:
        # Too many digits for int() (Python 3.11+ conversion limit)
        return None


def parse_filter_params(params: Mapping[str, Optional[str]]) -> Union[PredicateSet, FilterValidationError]:
    """
    Validate raw query-string values into a PredicateSet.

    Returns a FilterValidationError for the first invalid field instead
    of raising, so the caller decides how to report it.
    """
    parsed: Dict[str, Any] = {}

    is_palindrome = params.get("is_palindrome")
    if is_palindrome is not None:
        if is_palindrome not in ("true", "false"):
            return FilterValidationError("is_palindrome", 'is_palindrome must be "true" or "false"')
        parsed["is_palindrome"] = is_palindrome == "true"

    for field in ("min_length", "max_length", "word_count"):
        raw = params.get(field)
        if raw is None:
            continue
        number = _parse_non_negative_int(raw)
        if number is None:
            return FilterValidationError(field, f"{field} must be a non-negative integer")
        parsed[field] = number

    contains_character = params.get("contains_character")
    if contains_character is not None:
        if len(contains_character) != 1:
            return FilterValidationError(
                "contains_character", "contains_character must be a single character string"
            )
        parsed["contains_character"] = contains_character

    return PredicateSet(**parsed)


def matches(record: schemas.StringResponse, predicates: PredicateSet) -> bool:
    """Check one record against every set predicate"""
    props = record.properties

    if predicates.is_palindrome is not None and props.is_palindrome != predicates.is_palindrome:
        return False
    if predicates.min_length is not None and props.length < predicates.min_length:
        return False
    if predicates.max_length is not None and props.length > predicates.max_length:
        return False
    if predicates.word_count is not None and props.word_count != predicates.word_count:
        return False
    if (
        predicates.contains_character is not None
        and props.character_frequency_map.get(predicates.contains_character, 0) < 1
    ):
        return False
    return True


def filter_records(
    records: Iterable[schemas.StringResponse],
    predicates: PredicateSet
) -> List[schemas.StringResponse]:
    """Narrow records down to those satisfying all set predicates"""
    results = [record for record in records if matches(record, predicates)]
    logger.debug(f"Filter {predicates.applied()} matched {len(results)} record(s)")
    return results
