# utils/errors.py
# Domain errors; each carries the HTTP status main.py reports it with.

from typing import Optional


class TripServiceError(Exception):
    """Base exception for all trip-service errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(TripServiceError):
    """Missing or malformed input."""

    status_code = 400


class DuplicateTripId(TripServiceError):
    """A trip with the same tripId is already stored."""

    status_code = 400


class SeatUnavailable(TripServiceError):
    """Requested seat is not in the trip's available seats."""

    status_code = 400


class UpstreamNotFound(TripServiceError):
    """Route, schedule or permit identifier unknown to its service."""

    status_code = 404


class UpstreamUnavailable(TripServiceError):
    """Transport failure or malformed response from an upstream service."""

    status_code = 500


class NotFound(TripServiceError):
    """Trip targeted by a read, update or delete does not exist."""

    status_code = 404


class StorageError(TripServiceError):
    """Unclassified persistence failure."""

    status_code = 500
