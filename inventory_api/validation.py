"""Input coercion helpers used by the request schemas and path parameters."""
import math
from typing import Any, Optional, Tuple

from inventory_api.errors import NotFoundError, ValidationError

# Largest value an INTEGER column holds on every supported backend
MAX_INTEGER = 2**31 - 1


def parse_number(value: Any) -> Optional[float]:
    """
    Coerce a JSON/form value to a finite number.

    Accepts ints, floats and numeric strings (surrounding whitespace ignored).
    Returns None for anything else, including booleans, blank strings,
    NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_integer(value: Any) -> Optional[int]:
    """Coerce a value to an int, only when it is numerically integral."""
    number = parse_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def round_half_up(number: float) -> int:
    """Round to the nearest integer, with halves rounded towards +inf."""
    return math.floor(number + 0.5)


def parse_item_id(item_id: str) -> int:
    """
    Path dependency that turns the ``{item_id}`` segment into a positive int.

    Raises:
        ValidationError: if the segment is not a positive integer
        NotFoundError: if the id is beyond the range any stored id can have
    """
    parsed = parse_integer(item_id)
    if parsed is None or parsed <= 0:
        raise ValidationError("invalid id")
    if parsed > MAX_INTEGER:
        raise NotFoundError()
    return parsed


def normalize_search_term(value: Optional[str]) -> str:
    """Trim and case-fold a search term; None becomes the empty string."""
    return (value or "").strip().lower()


def resolve_search_term(query: Optional[str], q: Optional[str]) -> str:
    """
    Pick the search term from the ``query`` and ``q`` parameters.

    Either may be used. Supplying both with different non-empty values is
    ambiguous and rejected.
    """
    terms: Tuple[str, str] = (normalize_search_term(query), normalize_search_term(q))
    if all(terms) and terms[0] != terms[1]:
        raise ValidationError("use either query or q, not both")
    return terms[0] or terms[1]
