# models/trip.py
import re
from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

BookingStatus = Literal["Available", "Sold Out", "Pending"]

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATE_FORMAT = "%Y-%m-%d"

# largest seat inventory accepted from the permit service
MAX_SEAT_CAPACITY = 1000


def parse_trip_date(value) -> date:
    """Parse a strict YYYY-MM-DD string into a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValueError("tripDate must be in YYYY-MM-DD format")
    return datetime.strptime(value, DATE_FORMAT).date()


class CamelModel(BaseModel):
    # field names are snake_case in Python, camelCase on the wire and in Mongo
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class TripCreate(CamelModel):
    trip_id: int = Field(strict=True)
    trip_number: str
    trip_date: date
    booking_status: BookingStatus
    route_number: str
    schedule_id: int = Field(strict=True)
    permit_number: str
    # older clients send these in the body; the route service wins when it has them
    start_location: Optional[str] = None
    end_location: Optional[str] = None

    @field_validator("trip_date", mode="before")
    @classmethod
    def _strict_date(cls, value):
        return parse_trip_date(value)


class RouteInfo(CamelModel):
    route_name: str
    travel_distance: Union[str, int, float]
    travel_duration: Union[str, int, float]
    start_location: Optional[str] = None
    end_location: Optional[str] = None


class ScheduleInfo(CamelModel):
    departure_time: str
    arrival_time: str


class PermitInfo(CamelModel):
    vehicle_number: str
    bus_type: str
    price_per_seat: Union[int, float]
    music: bool
    ac: bool
    number_capacity: int = Field(ge=0, le=MAX_SEAT_CAPACITY)


class TripOut(CamelModel):
    trip_id: int
    trip_number: str
    trip_date: str
    booking_status: str
    route_number: str
    route_name: str
    travel_distance: Union[str, int, float]
    travel_duration: Union[str, int, float]
    start_location: Optional[str] = None
    end_location: Optional[str] = None
    schedule_id: int
    departure_time: str
    arrival_time: str
    permit_number: str
    vehicle_number: str
    bus_type: str
    price_per_seat: Union[int, float]
    music: bool
    ac: bool
    number_capacity: int
    available_seats: List[int] = []
    confirmed_seats: List[int] = []


class BookingStatusUpdate(CamelModel):
    booking_status: BookingStatus


class SeatConfirmation(CamelModel):
    seat_number: int
