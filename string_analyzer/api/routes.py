from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from typing import Any, Optional
import logging

from string_analyzer import schemas
from string_analyzer.crud import StringStore
from string_analyzer.errors import ValidationError
from string_analyzer.filters import FilterValidationError, filter_records, parse_filter_params
from string_analyzer.nl_query import parse_natural_language_query
from string_analyzer.utils import analyze_string, compute_sha256

router = APIRouter()
logger = logging.getLogger(__name__)


def get_store(request: Request) -> StringStore:
    """Dependency to provide the application's string store."""
    return request.app.state.store


def validate_create_payload(payload: Any) -> schemas.StringCreate:
    """
    Check the POST /strings body.
    400 if the body or its 'value' field is missing, 422 if 'value' is not a
    string or contains lone surrogates.
    """
    if not isinstance(payload, dict) or "value" not in payload:
        raise ValidationError('Missing "value" field in request body', field="value")

    value = payload["value"]
    if not isinstance(value, str):
        raise ValidationError(
            'Invalid data type for "value" (must be string)',
            field="value",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )

    # Lone surrogates survive JSON decoding but have no UTF-8 form to store or return
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError(
            'Invalid data type for "value" (must be valid Unicode text)',
            field="value",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )
    return schemas.StringCreate(value=value)


@router.post("/strings", response_model=schemas.StringResponse, status_code=status.HTTP_201_CREATED)
def create_string(
    payload: Any = Body(None),
    store: StringStore = Depends(get_store)
):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    string_data = validate_create_payload(payload)
    properties = analyze_string(string_data.value)
    return store.create(properties["id"], string_data.value, properties)


# Must be registered before /strings/{string_value}
@router.get("/strings/filter-by-natural-language", response_model=schemas.NaturalLanguageResponse)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="Natural language query"),
    store: StringStore = Depends(get_store)
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    if not query:
        raise ValidationError('Missing "query" parameter for natural language filtering', field="query")

    predicates = parse_natural_language_query(query)
    strings = filter_records(store.get_all(), predicates)

    return schemas.NaturalLanguageResponse(
        data=strings,
        count=len(strings),
        interpreted_query=schemas.InterpretedQuery(
            original=query,
            parsed_filters=predicates.applied()
        )
    )


@router.get("/strings/{string_value}", response_model=schemas.StringResponse)
def get_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    return store.get_by_id(compute_sha256(string_value))


@router.get("/strings", response_model=schemas.StringListResponse)
def get_all_strings(
    is_palindrome: Optional[str] = Query(None, description='"true" or "false"'),
    min_length: Optional[str] = Query(None, description="Minimum string length"),
    max_length: Optional[str] = Query(None, description="Maximum string length"),
    word_count: Optional[str] = Query(None, description="Exact word count"),
    contains_character: Optional[str] = Query(None, description="Single character the string must contain"),
    store: StringStore = Depends(get_store)
):
    """
    Get all strings with optional filtering.
    """
    result = parse_filter_params({
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    })
    if isinstance(result, FilterValidationError):
        raise ValidationError(f"Invalid query parameter: {result.message}", field=result.field)

    strings = filter_records(store.get_all(), result)

    return schemas.StringListResponse(
        data=strings,
        count=len(strings),
        filters_applied=result.applied()
    )


@router.delete("/strings/{string_value}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    store.delete_by_id(compute_sha256(string_value))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
