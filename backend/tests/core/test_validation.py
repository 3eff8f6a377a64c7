"""Validator Set — tests for pure rule helpers and per-request validators.

Tests cover:
    - Rule helpers return FieldError on violation, None on success
    - Activity rules report EVERY failing field, not just the first
    - Update adds the id rule; list validates filter/limit/offset
    - Text fields are limited to their column widths
    - Unregistered request types have no validators
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from reactivities.core.domain_types import (
    CATEGORY_MAX_LENGTH, CITY_MAX_LENGTH, VENUE_MAX_LENGTH,
)
from reactivities.core.errors import FieldError
from reactivities.core.requests import (
    ActivityFields, CreateActivity, DeleteActivity, ListActivities, UpdateActivity,
)
from reactivities.core.validation import (
    activity_validators, check_between, check_choice, check_in_future,
    check_max_length, check_required, run_validators, validate_activity_fields,
    validators_for,
)

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def _valid_fields(**overrides) -> ActivityFields:
    data = dict(
        title="Run", description="Morning run", category="sport",
        date=NOW + timedelta(days=3), city="London", venue="Hyde Park",
        latitude=51.5, longitude=-0.16,
    )
    data.update(overrides)
    return ActivityFields(**data)


def _fields_of(failures: list[FieldError]) -> list[str]:
    return [f.field for f in failures]


# ─── rule helpers ────────────────────────────────────────────────

def test_check_required_rejects_blank_values():
    assert check_required("title", "") == FieldError("title", "required")
    assert check_required("title", "   ") == FieldError("title", "required")
    assert check_required("date", None) == FieldError("date", "required")


def test_check_required_accepts_zero():
    assert check_required("latitude", 0.0) is None


def test_check_max_length():
    assert check_max_length("title", "x" * 100, 100) is None
    error = check_max_length("title", "x" * 101, 100)
    assert error.message == "must not exceed 100 characters"


def test_check_in_future_compares_against_clock():
    assert check_in_future("date", NOW + timedelta(seconds=1), NOW) is None
    assert check_in_future("date", NOW, NOW).message == "must be in the future"


def test_check_in_future_reads_naive_dates_in_clock_timezone():
    naive = (NOW - timedelta(hours=1)).replace(tzinfo=None)
    assert check_in_future("date", naive, NOW) is not None


def test_check_between_is_inclusive():
    assert check_between("latitude", -90, -90, 90) is None
    assert check_between("latitude", 90, -90, 90) is None
    assert check_between("latitude", 90.1, -90, 90).message == "must be between -90 and 90"
    assert check_between("latitude", None, -90, 90) is None


def test_check_choice():
    assert check_choice("filter", "all", ["all", "going"]) is None
    assert check_choice("filter", "mine", ["all", "going"]).field == "filter"


# ─── activity rules ──────────────────────────────────────────────

def test_valid_activity_has_no_failures():
    assert validate_activity_fields(_valid_fields(), NOW) == []


def test_empty_title_reports_required():
    failures = validate_activity_fields(_valid_fields(title=""), NOW)
    assert failures == [FieldError("title", "required")]


def test_all_failures_collected_not_just_first():
    failures = validate_activity_fields(ActivityFields(), NOW)
    assert _fields_of(failures) == [
        "title", "description", "date", "category",
        "city", "venue", "latitude", "longitude",
    ]
    assert all(f.message == "required" for f in failures)


def test_several_rule_kinds_reported_together():
    failures = validate_activity_fields(_valid_fields(
        title="x" * 101, date=NOW - timedelta(days=1), longitude=200.0,
    ), NOW)
    assert _fields_of(failures) == ["title", "date", "longitude"]


def test_text_fields_limited_to_column_width():
    at_limit = validate_activity_fields(_valid_fields(
        category="c" * CATEGORY_MAX_LENGTH,
        city="c" * CITY_MAX_LENGTH,
        venue="v" * VENUE_MAX_LENGTH,
    ), NOW)
    assert at_limit == []

    failures = validate_activity_fields(_valid_fields(
        category="c" * (CATEGORY_MAX_LENGTH + 1),
        city="c" * (CITY_MAX_LENGTH + 1),
        venue="v" * (VENUE_MAX_LENGTH + 1),
    ), NOW)
    assert failures == [
        FieldError("category", "must not exceed 50 characters"),
        FieldError("city", "must not exceed 100 characters"),
        FieldError("venue", "must not exceed 200 characters"),
    ]


# ─── validator registry ──────────────────────────────────────────

def test_create_validators_use_injected_clock():
    validators = activity_validators(lambda: NOW)
    request = CreateActivity(requested_by="u1", fields=_valid_fields(date=NOW))
    failures = run_validators(request, validators_for(validators, request))
    assert failures == [FieldError("date", "must be in the future")]


def test_update_validators_include_id_rule():
    validators = activity_validators(lambda: NOW)
    request = UpdateActivity(id="", fields=_valid_fields(title=""))
    failures = run_validators(request, validators_for(validators, request))
    assert _fields_of(failures) == ["id", "title"]


def test_list_validators():
    validators = activity_validators(lambda: NOW)
    request = ListActivities(requested_by="u1", filter="mine", limit=0, offset=-1)
    failures = run_validators(request, validators_for(validators, request))
    assert _fields_of(failures) == ["filter", "limit", "offset"]


def test_list_defaults_are_valid():
    validators = activity_validators(lambda: NOW)
    request = ListActivities(requested_by="u1")
    assert run_validators(request, validators_for(validators, request)) == []


def test_unregistered_request_type_has_no_validators():
    validators = activity_validators(lambda: NOW)
    assert validators_for(validators, DeleteActivity(id="7")) == ()


def test_lookup_is_by_exact_type():
    @dataclass(frozen=True)
    class SpecialCreate(CreateActivity):
        pass

    validators = activity_validators(lambda: NOW)
    request = SpecialCreate(requested_by="u1", fields=ActivityFields())
    assert validators_for(validators, request) == ()
