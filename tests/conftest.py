import httpx
import mongomock
import pytest
from httpx import ASGITransport, AsyncClient

from config import Settings
from main import app
from routes.trip import get_enrichment_client, get_trip_store
from services.trip_store import TripStore
from services.upstream import EnrichmentClient
from upstream_fakes import upstream_handler


@pytest.fixture
def settings():
    return Settings(
        environment="local",
        route_service_url_local="http://route.test/routes",
        schedule_service_url_local="http://schedule.test/schedules",
        permit_service_url_local="http://permit.test/permits",
    )


@pytest.fixture
def upstream_calls():
    return []


@pytest.fixture
def enrichment_client(settings, upstream_calls):
    def handler(request):
        upstream_calls.append(str(request.url))
        return upstream_handler(request)

    return EnrichmentClient(settings, transport=httpx.MockTransport(handler))


@pytest.fixture
def trip_collection():
    return mongomock.MongoClient().tripService.trips


@pytest.fixture
def store(trip_collection):
    trip_store = TripStore(trip_collection)
    trip_store.ensure_indexes()
    return trip_store


@pytest.fixture
async def api_client(store, enrichment_client):
    """Async client for the trip API with the store and upstreams faked."""
    app.dependency_overrides[get_trip_store] = lambda: store
    app.dependency_overrides[get_enrichment_client] = lambda: enrichment_client
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def trip_payload():
    return {
        "tripId": 101,
        "tripNumber": "T-101",
        "tripDate": "2024-05-01",
        "bookingStatus": "Available",
        "routeNumber": "R1",
        "scheduleId": 5,
        "permitNumber": "P9",
    }
