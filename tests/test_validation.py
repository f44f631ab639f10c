from datetime import date, datetime, timezone

import pytest

from timer_api.errors import ValidationFailed, format_error, format_server_error, translate_errors
from timer_api.schemas import validate_timer_payload


class TestValidateTimerPayload:
    def test_valid_payload(self):
        data = validate_timer_payload({"title": " Trip ", "date": "2030-06-01T08:30:00+02:00"})
        assert data.title == "Trip"
        assert data.description is None
        assert data.date == datetime(2030, 6, 1, 6, 30, tzinfo=timezone.utc)

    def test_date_objects_and_zulu_strings(self):
        assert validate_timer_payload({"title": "t", "date": date(2030, 1, 2)}).date == datetime(
            2030, 1, 2, tzinfo=timezone.utc
        )
        assert validate_timer_payload({"title": "t", "date": "2030-01-02T03:04:05Z"}).date == datetime(
            2030, 1, 2, 3, 4, 5, tzinfo=timezone.utc
        )

    def test_all_failures_collected(self):
        with pytest.raises(ValidationFailed) as info:
            validate_timer_payload({})
        errors = info.value.errors
        assert [e["field"] for e in errors] == ["title", "date"]
        assert all(e["error"] == "invalid_request" for e in errors)

    def test_boolean_date_rejected(self):
        with pytest.raises(ValidationFailed) as info:
            validate_timer_payload({"title": "t", "date": True})
        assert info.value.errors == [
            format_error("invalid_request", "Timer date must be a valid date", "date")
        ]

    def test_non_object(self):
        with pytest.raises(ValidationFailed) as info:
            validate_timer_payload("title=x")
        assert info.value.errors[0]["field"] == "body"


class TestErrorFormatting:
    def test_format_error_without_field(self):
        assert format_error("not_found", "Timer not found") == {
            "error": "not_found",
            "error_description": "Timer not found",
        }

    def test_server_error_is_opaque(self):
        assert format_server_error() == {"error": "server_error", "error_description": "Internal server error"}

    def test_one_entry_per_field(self):
        raw = [
            {"loc": ("body", "title"), "type": "string_type", "input": 1},
            {"loc": ("body", "title"), "type": "value_error", "input": 1},
            {"loc": ("query", "style"), "type": "enum", "input": "x"},
        ]
        details = translate_errors(raw, request_errors=True)
        assert [d["field"] for d in details] == ["title", "style"]
        assert details[1]["error_description"] == "Timer style must be 'digit' or 'word'"
