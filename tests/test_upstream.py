import httpx
import pytest

from config import Settings
from services.upstream import EnrichmentClient
from upstream_fakes import PERMITS, upstream_handler
from utils.errors import UpstreamNotFound, UpstreamUnavailable


@pytest.mark.asyncio
async def test_fetch_returns_all_three_payloads(enrichment_client, upstream_calls):
    enrichment = await enrichment_client.fetch("R1", 5, "P9")

    assert enrichment.route.route_name == "Colombo - Kandy"
    assert enrichment.route.start_location == "Colombo"
    assert enrichment.schedule.departure_time == "08:00"
    assert enrichment.permit.number_capacity == 40
    assert enrichment.permit.price_per_seat == 1500
    assert sorted(upstream_calls) == [
        "http://permit.test/permits/P9",
        "http://route.test/routes/R1",
        "http://schedule.test/schedules/5",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "route_number, schedule_id, permit_number, field",
    [
        ("R404", 5, "P9", "routeNumber"),
        ("R1", 99, "P9", "scheduleId"),
        ("R1", 5, "P404", "permitNumber"),
    ],
)
async def test_unknown_identifier_names_the_field(
    enrichment_client, route_number, schedule_id, permit_number, field
):
    with pytest.raises(UpstreamNotFound) as exc_info:
        await enrichment_client.fetch(route_number, schedule_id, permit_number)
    assert exc_info.value.message.startswith(f"Invalid {field}")
    assert exc_info.value.details["field"] == field


@pytest.mark.asyncio
async def test_transport_failure_is_unavailable(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = EnrichmentClient(settings, transport=httpx.MockTransport(handler))
    with pytest.raises(UpstreamUnavailable):
        await client.fetch("R1", 5, "P9")


@pytest.mark.asyncio
async def test_malformed_payload_is_unavailable(settings):
    def handler(request):
        if request.url.host == "permit.test":
            return httpx.Response(200, json={"vehicleNumber": "NB-1234"})
        return httpx.Response(
            200,
            json={
                "routeName": "x",
                "travelDistance": "1 km",
                "travelDuration": "5m",
                "departureTime": "08:00",
                "arrivalTime": "09:00",
            },
        )

    client = EnrichmentClient(settings, transport=httpx.MockTransport(handler))
    with pytest.raises(UpstreamUnavailable, match="permit"):
        await client.fetch("R1", 5, "P9")


@pytest.mark.asyncio
async def test_missing_base_url_is_unavailable():
    client = EnrichmentClient(Settings(environment="production"))
    with pytest.raises(UpstreamUnavailable, match="No URL configured"):
        await client.fetch("R1", 5, "P9")


@pytest.mark.asyncio
async def test_identifier_is_escaped_as_one_path_segment(enrichment_client, upstream_calls):
    with pytest.raises(UpstreamNotFound, match="routeNumber"):
        await enrichment_client.fetch("NOPE/../R1", 5, "P9")

    assert "http://route.test/routes/NOPE%2F..%2FR1" in upstream_calls
    assert "http://route.test/routes/R1" not in upstream_calls


@pytest.mark.asyncio
@pytest.mark.parametrize("route_number", ["R1?x=1", "R1#frag"])
async def test_query_and_fragment_characters_stay_in_identifier(enrichment_client, upstream_calls, route_number):
    with pytest.raises(UpstreamNotFound):
        await enrichment_client.fetch(route_number, 5, "P9")
    assert "http://route.test/routes/R1" not in upstream_calls


@pytest.mark.asyncio
async def test_dot_segment_identifier_is_not_requested(enrichment_client, upstream_calls):
    with pytest.raises(UpstreamNotFound, match="permitNumber"):
        await enrichment_client.fetch("R1", 5, "..")
    assert not any(call.startswith("http://permit.test") for call in upstream_calls)


@pytest.mark.asyncio
async def test_oversized_seat_capacity_is_malformed(settings):
    permit = dict(PERMITS["P9"], numberCapacity=10**9)

    def handler(request):
        if request.url.host == "permit.test":
            return httpx.Response(200, json=permit)
        return upstream_handler(request)

    client = EnrichmentClient(settings, transport=httpx.MockTransport(handler))
    with pytest.raises(UpstreamUnavailable, match="permit"):
        await client.fetch("R1", 5, "P9")
