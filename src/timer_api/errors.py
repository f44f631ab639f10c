from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple, TypedDict

from pydantic import ValidationError

NOT_FOUND = "not_found"
INVALID_REQUEST = "invalid_request"
SERVER_ERROR = "server_error"

# field -> (message when absent, message when present but malformed)
_FIELD_MESSAGES: Dict[str, Tuple[str, str]] = {
    "title": ("Timer title is required", "Timer title must be a string"),
    "date": ("Timer date is required", "Timer date must be a valid date"),
    "description": ("Timer description must be a string", "Timer description must be a string"),
    "style": ("Timer style is required", "Timer style must be 'digit' or 'word'"),
}

# Leading parts of FastAPI request error locations
_REQUEST_LOCATIONS = {"body", "query", "path"}

_ABSENT_TYPES = {"missing", "string_too_short"}


# PUBLIC_INTERFACE
class ErrorDetail(TypedDict, total=False):
    """
    Structured error entry returned to API clients.

    Fields:
    - error: machine readable code (e.g. 'not_found', 'invalid_request')
    - error_description: human readable message
    - field: name of the offending input field, for validation errors
    """

    error: str
    error_description: str
    field: str


class TimerAPIError(Exception):
    """Base class for errors raised by the timer service."""


class ValidationFailed(TimerAPIError):
    """One or more input fields are invalid; ``errors`` lists every one of them."""

    def __init__(self, errors: List[ErrorDetail]) -> None:
        super().__init__(", ".join(e["error_description"] for e in errors))
        self.errors = errors


class StoreFailure(TimerAPIError):
    """Unexpected failure talking to the persistence layer."""


# PUBLIC_INTERFACE
def format_error(error: str, description: str, field: Optional[str] = None) -> ErrorDetail:
    """Build a single structured error entry."""
    detail: ErrorDetail = {"error": error, "error_description": description}
    if field is not None:
        detail["field"] = field
    return detail


# PUBLIC_INTERFACE
def format_server_error() -> ErrorDetail:
    """Opaque body for unexpected failures; never carries internal details."""
    return format_error(SERVER_ERROR, "Internal server error")


def _field_message(field: str, err: Dict[str, Any]) -> str:
    absent_msg, invalid_msg = _FIELD_MESSAGES.get(field, (f"{field} is required", f"{field} is invalid"))
    value = err.get("input")
    if err.get("type") in _ABSENT_TYPES or value is None or (isinstance(value, str) and not value.strip()):
        return absent_msg
    return invalid_msg


# PUBLIC_INTERFACE
def translate_errors(raw_errors: Iterable[Dict[str, Any]], request_errors: bool = False) -> List[ErrorDetail]:
    """
    Translate pydantic/FastAPI error dicts into field-addressable ErrorDetails.

    Only the first error per field is kept, so the result has one entry per
    failing field. With ``request_errors`` the leading 'body'/'query'/'path'
    part of FastAPI error locations is dropped.
    """
    details: List[ErrorDetail] = []
    seen = set()
    for err in raw_errors:
        loc = tuple(err.get("loc", ()))
        if request_errors and loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        # json decode errors carry a character offset instead of a field name
        field = loc[0] if loc and isinstance(loc[0], str) else "body"
        if field in seen:
            continue
        seen.add(field)
        if field == "body":
            message = "Request body must be a JSON object"
        else:
            message = _field_message(field, err)
        details.append(format_error(INVALID_REQUEST, message, field))
    return details


# PUBLIC_INTERFACE
def translate_validation_error(exc: ValidationError) -> List[ErrorDetail]:
    """Translate a pydantic ValidationError into one ErrorDetail per failing field."""
    return translate_errors(exc.errors())
