# utils/validators.py
from typing import Any

import pydantic

from models.trip import DATE_FORMAT, TripCreate, parse_trip_date
from utils.errors import ValidationError

REQUIRED_TRIP_FIELDS = (
    "tripId",
    "tripNumber",
    "tripDate",
    "bookingStatus",
    "routeNumber",
    "scheduleId",
    "permitNumber",
)


def _describe(exc: pydantic.ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "body"
        msg = err["msg"]
        # pydantic prefixes messages raised from validators
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        parts.append(f"{field}: {msg}")
    return "; ".join(parts)


def validate_trip_input(payload: Any) -> TripCreate:
    """Check a raw creation body before any upstream call is made.

    Raises ValidationError when a required field is absent, when tripDate
    is not a strict YYYY-MM-DD day or when bookingStatus is not one of
    the known values. Returns the parsed input with tripDate as a date.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    missing = [name for name in REQUIRED_TRIP_FIELDS if payload.get(name) in (None, "")]
    if missing:
        raise ValidationError(
            f"Required fields missing: {', '.join(missing)}",
            details={"missing": missing},
        )

    try:
        return TripCreate.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


def normalize_date_param(value: str) -> str:
    """Validate a tripDate path segment and return it as YYYY-MM-DD."""
    try:
        return parse_trip_date(value).strftime(DATE_FORMAT)
    except ValueError as exc:
        raise ValidationError(f"Invalid tripDate '{value}': expected YYYY-MM-DD") from exc
