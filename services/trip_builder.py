# services/trip_builder.py
from models.trip import DATE_FORMAT, TripCreate
from services.upstream import Enrichment


def build_trip_document(trip_in: TripCreate, enrichment: Enrichment) -> dict:
    """Merge creation input with upstream payloads into the stored trip document.

    Upstream fields are copied as they are at creation time; later changes
    in the route, schedule or permit services do not reach stored trips.
    """
    route = enrichment.route
    schedule = enrichment.schedule
    permit = enrichment.permit

    return {
        "tripId": trip_in.trip_id,
        "tripNumber": trip_in.trip_number,
        "tripDate": trip_in.trip_date.strftime(DATE_FORMAT),
        "bookingStatus": trip_in.booking_status,
        "routeNumber": trip_in.route_number,
        "routeName": route.route_name,
        "travelDistance": route.travel_distance,
        "travelDuration": route.travel_duration,
        "startLocation": route.start_location or trip_in.start_location,
        "endLocation": route.end_location or trip_in.end_location,
        "scheduleId": trip_in.schedule_id,
        "departureTime": schedule.departure_time,
        "arrivalTime": schedule.arrival_time,
        "permitNumber": trip_in.permit_number,
        "vehicleNumber": permit.vehicle_number,
        "busType": permit.bus_type,
        "pricePerSeat": permit.price_per_seat,
        "music": permit.music,
        "ac": permit.ac,
        "numberCapacity": permit.number_capacity,
        "availableSeats": list(range(1, permit.number_capacity + 1)),
        "confirmedSeats": [],
    }
