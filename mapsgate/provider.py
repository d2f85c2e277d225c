"""Route provider — Google Directions client and the adapter that normalizes it.

The adapter is the only place that knows provider status codes; everything past
it sees a Route or a ProviderError.
"""
import logging
import re
from datetime import datetime
from typing import List, Optional, Protocol, Sequence, Union

import httpx

from .errors import ProviderError, ProviderErrorKind
from .models import DEPARTURE_NOW, Route, RouteRequest, Step

logger = logging.getLogger(__name__)

DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"
SEPARATOR = "|"

_TAG_RE = re.compile(r"<[^>]*>")

_STATUS_KINDS = {
    "ZERO_RESULTS": ProviderErrorKind.NO_RESULTS,
    "NOT_FOUND": ProviderErrorKind.LOCATION_NOT_FOUND,
    "OVER_QUERY_LIMIT": ProviderErrorKind.QUOTA_EXCEEDED,
    "OVER_DAILY_LIMIT": ProviderErrorKind.QUOTA_EXCEEDED,
    "REQUEST_DENIED": ProviderErrorKind.REQUEST_DENIED,
}

_KIND_MESSAGES = {
    ProviderErrorKind.NO_RESULTS:
        "No route found. Please check that your origin and destination are valid locations.",
    ProviderErrorKind.LOCATION_NOT_FOUND:
        "One or more locations could not be found. Please check your addresses.",
    ProviderErrorKind.QUOTA_EXCEEDED:
        "Google Maps API quota exceeded. Please try again later.",
    ProviderErrorKind.REQUEST_DENIED:
        "Google Maps API request denied. Please check API key configuration.",
    ProviderErrorKind.UNKNOWN:
        "Route calculation failed",
}


class ProviderStatusError(Exception):
    """Raw failure from the directions service, keyed by its native status."""

    def __init__(self, status: str, message: str = ""):
        super().__init__(f"{status}: {message}" if message else status)
        self.status = status
        self.message = message


class RouteProvider(Protocol):
    async def directions(
        self,
        origin: str,
        destination: str,
        waypoints: Sequence[str],
        avoid: Sequence[str],
        departure_time: str,
        traffic_model: str,
        alternatives: bool = False,
    ) -> dict:
        """Return the first route of a Directions response or raise ProviderStatusError."""
        ...


def strip_markup(text: str) -> str:
    """Remove markup tags, keeping inner text and whitespace untouched."""
    return _TAG_RE.sub("", text or "")


def departure_param(value: str) -> Union[str, int]:
    """Translate a departure time into the provider's form: "now" or epoch seconds.

    Raises ValueError for anything that is neither "now", epoch seconds nor ISO-8601.
    """
    value = value.strip()
    if value == DEPARTURE_NOW:
        return DEPARTURE_NOW
    if value.isdigit():
        return int(value)
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return int(datetime.fromisoformat(value).timestamp())


class GoogleDirectionsClient:
    """Directions web service over httpx."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        language: str = "en",
        region: Optional[str] = None,
        base_url: str = DIRECTIONS_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._timeout = timeout
        self._language = language
        self._region = region
        self._base_url = base_url
        self._transport = transport

    def build_params(
        self,
        origin: str,
        destination: str,
        waypoints: Sequence[str],
        avoid: Sequence[str],
        departure_time: str,
        traffic_model: str,
        alternatives: bool = False,
    ) -> dict:
        params = {
            "origin": origin,
            "destination": destination,
            "key": self._api_key,
            "units": "metric",
            "language": self._language,
            "departure_time": departure_param(departure_time),
            "traffic_model": traffic_model,
        }
        if self._region:
            params["region"] = self._region
        if waypoints:
            params["waypoints"] = SEPARATOR.join(waypoints)
        if avoid:
            params["avoid"] = SEPARATOR.join(avoid)
        if alternatives:
            params["alternatives"] = "true"
        return params

    async def directions(
        self,
        origin: str,
        destination: str,
        waypoints: Sequence[str],
        avoid: Sequence[str],
        departure_time: str,
        traffic_model: str,
        alternatives: bool = False,
    ) -> dict:
        params = self.build_params(
            origin, destination, waypoints, avoid, departure_time, traffic_model, alternatives,
        )
        logger.info(f"Directions request: {origin} -> {destination} "
                    f"(waypoints={len(waypoints)}, avoid={params.get('avoid', '')}, "
                    f"traffic_model={traffic_model})")
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(self._base_url, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise ProviderStatusError("TRANSPORT_ERROR", str(e)) from e
        except ValueError as e:
            raise ProviderStatusError("INVALID_RESPONSE", str(e)) from e

        status = data.get("status", "UNKNOWN_ERROR")
        if status != "OK":
            raise ProviderStatusError(status, data.get("error_message", ""))
        routes = data.get("routes") or []
        if not routes:
            raise ProviderStatusError("ZERO_RESULTS", "empty route list")
        return routes[0]


def _map_status(exc: ProviderStatusError) -> ProviderError:
    kind = _STATUS_KINDS.get(exc.status, ProviderErrorKind.UNKNOWN)
    message = _KIND_MESSAGES[kind]
    if kind is ProviderErrorKind.UNKNOWN:
        message = f"{message}: {exc.message or exc.status}"
    return ProviderError(kind, message)


def _parse_steps(leg: dict) -> List[Step]:
    return [
        Step(
            instruction=strip_markup(step.get("html_instructions", "")),
            distance_text=step.get("distance", {}).get("text", ""),
            duration_text=step.get("duration", {}).get("text", ""),
            maneuver=step.get("maneuver") or "continue",
        )
        for step in leg.get("steps", [])
    ]


class RouteProviderAdapter:
    """Turns a RouteRequest into exactly one Route."""

    def __init__(self, provider: RouteProvider):
        self.provider = provider

    async def fetch_route(self, request: RouteRequest) -> Route:
        try:
            raw = await self.provider.directions(
                request.origin,
                request.destination,
                list(request.waypoints),
                request.avoid,
                request.departure_time,
                request.traffic_model.value,
                request.want_alternatives,
            )
        except ProviderStatusError as e:
            logger.error(f"Directions failed for {request.origin} -> {request.destination}: {e}")
            raise _map_status(e) from e

        legs = raw.get("legs") or []
        if not legs:
            raise ProviderError(ProviderErrorKind.NO_RESULTS, _KIND_MESSAGES[ProviderErrorKind.NO_RESULTS])
        leg = legs[0]
        duration = int(leg.get("duration", {}).get("value", 0))
        in_traffic = leg.get("duration_in_traffic", {}).get("value")

        route = Route(
            summary=raw.get("summary", ""),
            distance_meters=int(leg.get("distance", {}).get("value", 0)),
            duration_seconds=duration,
            duration_in_traffic_seconds=int(in_traffic) if in_traffic is not None else duration,
            steps=tuple(_parse_steps(leg)),
            polyline=raw.get("overview_polyline", {}).get("points", ""),
            warnings=tuple(raw.get("warnings") or ()),
            copyrights=raw.get("copyrights", ""),
        )
        logger.info(f"Route calculated: {route.distance_meters}m, {route.duration_seconds}s")
        return route
