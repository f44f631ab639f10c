from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import INVALID_REQUEST, ValidationFailed, format_error, translate_validation_error
from .formatting import TimerStyle, format_duration
from .models import TimerEntity, as_utc, remaining_ms

# Shared type for incoming dates: date, datetime, ISO8601 string or epoch milliseconds
DateInput = Union[date, datetime, str, int, float]


def _to_utc(value: datetime) -> datetime:
    # Offsets can push dates at the ends of the calendar out of range
    try:
        return as_utc(value)
    except OverflowError as e:
        raise ValueError("Date out of range once converted to UTC.") from e


def _parse_date(value: Optional[DateInput]) -> Optional[datetime]:
    """
    Internal helper to normalize date input into an aware UTC datetime.
    - Strings are parsed via datetime.fromisoformat; a bare date becomes 00:00.
    - Numbers are epoch milliseconds.
    - Naive datetimes are taken to be UTC.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _to_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, bool):
        raise ValueError("Invalid type for date; expected ISO8601 string or epoch milliseconds.")

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError("Epoch milliseconds out of range.") from e

    if isinstance(value, str):
        s = value.strip()
        if not s:
            # A blank string counts as no date at all
            return None
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(s)
        except ValueError:
            try:
                d = date.fromisoformat(s)
                return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
            except ValueError as e:
                raise ValueError(
                    "Invalid date format. Use ISO8601 date or datetime string (e.g., '2025-01-31' or '2025-01-31T13:45:00Z')."
                ) from e
        return _to_utc(parsed)

    raise ValueError("Invalid type for date; expected ISO8601 string or epoch milliseconds.")


# PUBLIC_INTERFACE
class TimerCreate(BaseModel):
    """
    Schema for creating a new Timer.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "New year",
                "description": "Countdown to midnight",
                "date": "2027-01-01T00:00:00Z",
            }
        },
    )

    title: str = Field(..., description="Title of the timer", min_length=1)
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    date: datetime = Field(
        ...,
        description="Target date of the timer. Accepts ISO8601 date/datetime or epoch milliseconds; naive values are UTC",
    )

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: Optional[DateInput]) -> Optional[datetime]:
        """
        Normalize date from str/date/datetime/number to an aware UTC datetime.
        """
        return _parse_date(v)

    @field_validator("description")
    @classmethod
    def blank_description_is_null(cls, v: Optional[str]) -> Optional[str]:
        return v or None


# PUBLIC_INTERFACE
class TimerOut(BaseModel):
    """
    Schema returned by the API for a Timer, including its derived countdown.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "3f1c2a9e5b7d4c0e8a6f1b2c3d4e5f60",
                "title": "New year",
                "description": "Countdown to midnight",
                "date": "2027-01-01T00:00:00Z",
                "createdAt": "2026-10-18T10:15:30.123456Z",
                "updatedAt": "2026-10-18T10:15:30.123456Z",
                "remaining": 6443069876,
                "countdown": "74:13:44:29",
            }
        },
    )

    id: str = Field(..., description="Unique identifier of the timer")
    title: str = Field(..., description="Title of the timer")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    date: datetime = Field(..., description="Target date of the timer")
    created_at: datetime = Field(..., serialization_alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., serialization_alias="updatedAt", description="Last update timestamp")
    remaining: int = Field(..., description="Milliseconds until the target date at read time; negative once passed")
    countdown: str = Field(..., description="The remaining time rendered in the requested style")


class TimerEnvelope(BaseModel):
    timer: TimerOut


class TimerCreated(BaseModel):
    id: str = Field(..., description="Identifier of the created timer")


# PUBLIC_INTERFACE
def validate_timer_payload(payload: Any) -> TimerCreate:
    """
    Validate a raw request body for timer creation.

    Raises:
        ValidationFailed: with one entry per failing field when the payload is invalid.
    """
    if not isinstance(payload, dict):
        raise ValidationFailed([format_error(INVALID_REQUEST, "Request body must be a JSON object", "body")])
    try:
        return TimerCreate.model_validate(payload)
    except ValidationError as exc:
        raise ValidationFailed(translate_validation_error(exc)) from exc


# PUBLIC_INTERFACE
def as_timer_out(
    entity: TimerEntity,
    style: TimerStyle = TimerStyle.DIGIT,
    now: Optional[datetime] = None,
) -> TimerOut:
    """
    Build the API representation of a stored Timer, deriving 'remaining' and
    'countdown' from the current clock (or ``now``) at call time.
    """
    remaining = remaining_ms(entity["date"], now)
    return TimerOut(
        id=entity["id"],
        title=entity["title"],
        description=entity["description"],
        date=entity["date"],
        created_at=entity["created_at"],
        updated_at=entity["updated_at"],
        remaining=remaining,
        countdown=format_duration(remaining, style),
    )
