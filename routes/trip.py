# routes/trip.py
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from config import get_settings
from database import trips
from models.trip import BookingStatusUpdate, SeatConfirmation, TripOut
from services.trip_builder import build_trip_document
from services.trip_store import TripStore
from services.upstream import EnrichmentClient
from utils.errors import DuplicateTripId
from utils.validators import normalize_date_param, validate_trip_input

logger = logging.getLogger(__name__)

router = APIRouter()


def get_trip_store() -> TripStore:
    return TripStore(trips)


def get_enrichment_client() -> EnrichmentClient:
    return EnrichmentClient(get_settings())


# === POST: Create Trip ===
@router.post("/trips", status_code=201)
async def create_trip(
    payload: Any = Body(...),
    store: TripStore = Depends(get_trip_store),
    upstream: EnrichmentClient = Depends(get_enrichment_client),
):
    trip_in = validate_trip_input(payload)

    # fail fast before calling upstream; the unique index still guards the insert
    if store.exists(trip_in.trip_id):
        raise DuplicateTripId(f"Trip with ID {trip_in.trip_id} already exists")

    enrichment = await upstream.fetch(
        trip_in.route_number, trip_in.schedule_id, trip_in.permit_number
    )
    trip = store.create(build_trip_document(trip_in, enrichment))

    logger.info(
        "Trip %s created (route=%s, date=%s, seats=%d)",
        trip["tripId"],
        trip["routeNumber"],
        trip["tripDate"],
        trip["numberCapacity"],
    )
    return {"message": "Trip created successfully", "trip": trip}


# === GET: Trips by Route + Date (optional music / ac filters) ===
@router.get("/trips/{start_location}/{end_location}/{trip_date}", response_model=List[TripOut])
async def get_trips_by_location_and_date(
    start_location: str,
    end_location: str,
    trip_date: str,
    music: Optional[bool] = Query(None),
    ac: Optional[bool] = Query(None),
    store: TripStore = Depends(get_trip_store),
):
    return store.find_by_route_and_date(
        start_location,
        end_location,
        normalize_date_param(trip_date),
        music=music,
        ac=ac,
    )


# === GET: Trips by Schedule + Date ===
@router.get("/trips/{schedule_id}/{trip_date}", response_model=List[TripOut])
async def get_trips_by_schedule_and_date(
    schedule_id: int,
    trip_date: str,
    store: TripStore = Depends(get_trip_store),
):
    return store.find_by_schedule_and_date(schedule_id, normalize_date_param(trip_date))


@router.get("/trips/{trip_id}", response_model=TripOut)
async def get_trip_by_id(trip_id: int, store: TripStore = Depends(get_trip_store)):
    return store.find_by_id(trip_id)


# === PATCH: Booking Status ===
@router.patch("/trips/{trip_id}/booking-status")
async def update_booking_status(
    trip_id: int,
    update: BookingStatusUpdate,
    store: TripStore = Depends(get_trip_store),
):
    store.update_booking_status(trip_id, update.booking_status)
    logger.info("Trip %s booking status set to %s", trip_id, update.booking_status)
    return {"message": "Booking status updated successfully"}


# older clients patch the trip itself
router.add_api_route(
    "/trips/{trip_id}",
    update_booking_status,
    methods=["PATCH"],
    include_in_schema=False,
)


# === PATCH: Confirm one seat ===
@router.patch("/trips/{trip_id}/confirm-seat")
async def confirm_seat(
    trip_id: int,
    seat: SeatConfirmation,
    store: TripStore = Depends(get_trip_store),
):
    trip = store.confirm_seat(trip_id, seat.seat_number)
    logger.info("Trip %s seat %s confirmed", trip_id, seat.seat_number)
    return {"message": "Seat confirmed successfully", "trip": trip}


# === DELETE: Trip ===
@router.delete("/trips/{trip_id}")
async def delete_trip_by_id(trip_id: int, store: TripStore = Depends(get_trip_store)):
    store.delete(trip_id)
    logger.info("Trip %s deleted", trip_id)
    return {"message": "Trip deleted successfully"}
