# services/upstream.py
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Type, TypeVar, Union
from urllib.parse import quote

import httpx
import pydantic

from config import Settings
from models.trip import CamelModel, PermitInfo, RouteInfo, ScheduleInfo
from utils.errors import UpstreamNotFound, UpstreamUnavailable

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=CamelModel)


@dataclass(frozen=True)
class Enrichment:
    route: RouteInfo
    schedule: ScheduleInfo
    permit: PermitInfo


class EnrichmentClient:
    """Read-only lookups against the route, schedule and permit services.

    Base URLs come from the injected Settings, resolved once for the
    current deployment mode. Calls are not retried and use the transport
    default timeout.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.urls = settings.upstream_urls()
        self._transport = transport

    async def fetch(
        self,
        route_number: str,
        schedule_id: Union[int, str],
        permit_number: str,
    ) -> Enrichment:
        async with httpx.AsyncClient(transport=self._transport) as client:
            # wait for all three so none is left running against a closed client
            results = await asyncio.gather(
                self._get(client, "route", "routeNumber", route_number, RouteInfo),
                self._get(client, "schedule", "scheduleId", schedule_id, ScheduleInfo),
                self._get(client, "permit", "permitNumber", permit_number, PermitInfo),
                return_exceptions=True,
            )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        route, schedule, permit = results
        return Enrichment(route=route, schedule=schedule, permit=permit)

    async def _get(
        self,
        client: httpx.AsyncClient,
        service: str,
        field: str,
        identifier: Union[int, str],
        model: Type[ModelT],
    ) -> ModelT:
        base_url = self.urls.get(service)
        if not base_url:
            raise UpstreamUnavailable(f"No URL configured for the {service} service")

        # the identifier is exactly one path segment; dot segments would be collapsed
        segment = str(identifier)
        if segment in (".", ".."):
            raise UpstreamNotFound(
                f"Invalid {field}: {identifier}",
                details={"field": field, "value": identifier},
            )
        url = f"{base_url.rstrip('/')}/{quote(segment, safe='')}"
        try:
            response = await client.get(url)
        except httpx.TransportError as exc:
            logger.error("%s service unreachable at %s: %s", service, url, exc)
            raise UpstreamUnavailable(f"{service.capitalize()} service unavailable") from exc

        if not response.is_success:
            logger.warning(
                "%s lookup for %s=%s returned %s", service, field, identifier, response.status_code
            )
            raise UpstreamNotFound(
                f"Invalid {field}: {identifier}",
                details={"field": field, "value": identifier},
            )

        try:
            return model.model_validate(response.json())
        except (ValueError, pydantic.ValidationError) as exc:
            logger.error("Malformed response from %s service for %s=%s", service, field, identifier)
            raise UpstreamUnavailable(f"Malformed response from {service} service") from exc
