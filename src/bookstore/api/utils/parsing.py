"""Request parsing helpers: path identifiers and JSON bodies."""

import json
import re
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from src.bookstore.core.exceptions import InvalidBookIdError, MalformedBodyError

ModelT = TypeVar("ModelT", bound=BaseModel)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_DECIMAL_INT = re.compile(r"[+-]?[0-9]+")
_INT64_MAX_DIGITS = len(str(INT64_MAX))


def parse_book_id(raw: str) -> int:
    """Parse a base-10 signed 64-bit integer.

    Only an optional sign followed by ASCII digits is accepted: no surrounding
    whitespace, no underscores, no other bases. Leading zeros are allowed.
    """
    if not _DECIMAL_INT.fullmatch(raw):
        raise InvalidBookIdError(raw)
    sign = "-" if raw.startswith("-") else ""
    digits = raw.lstrip("+-").lstrip("0") or "0"
    # Longer digit strings never fit and can trip int()'s conversion limit
    if len(digits) > _INT64_MAX_DIGITS:
        raise InvalidBookIdError(raw)
    value = int(sign + digits)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidBookIdError(raw)
    return value


def parse_body(raw: bytes, model: type[ModelT]) -> ModelT:
    """Decode a JSON object from ``raw`` into ``model``."""
    if not raw.strip():
        raise MalformedBodyError("Request body is empty")

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedBodyError(f"Request body is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedBodyError("Request body must be a JSON object")

    try:
        return model.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in e.errors()
        )
        raise MalformedBodyError(f"Invalid value for field(s): {fields}") from e
