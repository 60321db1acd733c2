# services/trip_store.py
import logging
from contextlib import contextmanager
from typing import List, Optional

import pymongo
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from utils.errors import DuplicateTripId, NotFound, SeatUnavailable, StorageError

logger = logging.getLogger(__name__)

# never expose Mongo's own identifier
PUBLIC_FIELDS = {"_id": 0}


@contextmanager
def _storage_errors(action: str):
    try:
        yield
    except PyMongoError as exc:
        logger.error("Storage failure while %s: %s", action, exc)
        raise StorageError(f"Storage failure while {action}") from exc


class TripStore:
    """Trip documents in a Mongo collection, keyed by tripId."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def ensure_indexes(self) -> None:
        with _storage_errors("creating indexes"):
            self.collection.create_index(
                [("tripId", pymongo.ASCENDING)], unique=True, name="tripId_unique"
            )
            self.collection.create_index(
                [
                    ("startLocation", pymongo.ASCENDING),
                    ("endLocation", pymongo.ASCENDING),
                    ("tripDate", pymongo.ASCENDING),
                ],
                name="route_date",
            )
            self.collection.create_index(
                [("scheduleId", pymongo.ASCENDING), ("tripDate", pymongo.ASCENDING)],
                name="schedule_date",
            )

    def exists(self, trip_id: int) -> bool:
        with _storage_errors("checking trip"):
            return self.collection.find_one({"tripId": trip_id}, {"_id": 1}) is not None

    def create(self, trip: dict) -> dict:
        doc = dict(trip)
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateTripId(f"Trip with ID {trip['tripId']} already exists") from exc
        except PyMongoError as exc:
            logger.error("Storage failure while creating trip: %s", exc)
            raise StorageError("Storage failure while creating trip") from exc
        doc.pop("_id", None)
        return doc

    def find_by_id(self, trip_id: int) -> dict:
        with _storage_errors("fetching trip"):
            trip = self.collection.find_one({"tripId": trip_id}, PUBLIC_FIELDS)
        if not trip:
            raise NotFound("Trip not found")
        return trip

    def find_by_route_and_date(
        self,
        start_location: str,
        end_location: str,
        trip_date: str,
        music: Optional[bool] = None,
        ac: Optional[bool] = None,
    ) -> List[dict]:
        query = {
            "startLocation": start_location,
            "endLocation": end_location,
            "tripDate": trip_date,
        }
        # amenity filters only apply when the caller asked for them
        if music is not None:
            query["music"] = music
        if ac is not None:
            query["ac"] = ac
        with _storage_errors("searching trips"):
            return list(self.collection.find(query, PUBLIC_FIELDS).sort("tripId", pymongo.ASCENDING))

    def find_by_schedule_and_date(self, schedule_id: int, trip_date: str) -> List[dict]:
        with _storage_errors("searching trips"):
            cursor = self.collection.find(
                {"scheduleId": schedule_id, "tripDate": trip_date}, PUBLIC_FIELDS
            ).sort("tripId", pymongo.ASCENDING)
            return list(cursor)

    def update_booking_status(self, trip_id: int, booking_status: str) -> None:
        with _storage_errors("updating booking status"):
            result = self.collection.update_one(
                {"tripId": trip_id}, {"$set": {"bookingStatus": booking_status}}
            )
        if result.matched_count == 0:
            raise NotFound("Trip not found")

    def confirm_seat(self, trip_id: int, seat_number: int) -> dict:
        """Move one seat from availableSeats to confirmedSeats.

        The availability check and the move are a single conditional update,
        so two requests for the same seat cannot both succeed.
        """
        with _storage_errors("confirming seat"):
            result = self.collection.update_one(
                {"tripId": trip_id, "availableSeats": seat_number},
                {
                    "$pull": {"availableSeats": seat_number},
                    "$push": {"confirmedSeats": seat_number},
                },
            )
        if result.matched_count == 0:
            if not self.exists(trip_id):
                raise NotFound("Trip not found")
            raise SeatUnavailable(f"Seat {seat_number} is not available on trip {trip_id}")
        return self.find_by_id(trip_id)

    def delete(self, trip_id: int) -> None:
        with _storage_errors("deleting trip"):
            result = self.collection.delete_one({"tripId": trip_id})
        if result.deleted_count == 0:
            raise NotFound("Trip not found")
