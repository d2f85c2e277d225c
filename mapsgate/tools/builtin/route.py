"""Route tool — single route with live traffic and turn-by-turn steps."""
import logging
from typing import Any, Dict, Optional, Sequence

from ...models import Route, RouteRequest
from ...provider import RouteProviderAdapter
from ..args import CalculateRouteArgs, RouteOptions
from ..formatting import duration_block, format_distance
from ..registry import register_tool, ToolResult

logger = logging.getLogger(__name__)

MAX_STEPS = 8  # keep responses readable


def build_request(
    origin: str,
    destination: str,
    waypoints: Sequence[str] = (),
    options: Optional[RouteOptions] = None,
    alternatives: bool = False,
) -> RouteRequest:
    options = options or RouteOptions()
    return RouteRequest(
        origin=origin,
        destination=destination,
        waypoints=tuple(waypoints),
        avoid_tolls=options.avoid_tolls,
        avoid_highways=options.avoid_highways,
        departure_time=options.departure_time,
        traffic_model=options.traffic_model,
        want_alternatives=alternatives,
    )


def timing_blocks(route: Route) -> Dict[str, Any]:
    return {
        "distance": format_distance(route.distance_meters),
        "duration": duration_block(route.duration_seconds),
        "durationInTraffic": duration_block(route.duration_in_traffic_seconds),
        "trafficDelay": duration_block(route.traffic_delay_seconds),
    }


def steps_block(route: Route, limit: int = MAX_STEPS):
    return [
        {
            "stepNumber": i + 1,
            "instruction": step.instruction,
            "distance": step.distance_text,
            "duration": step.duration_text,
            "maneuver": step.maneuver,
        }
        for i, step in enumerate(route.steps[:limit])
    ]


@register_tool(
    "calculate_route",
    CalculateRouteArgs,
    description=(
        "Calculate optimal driving route with real-time traffic from Google Maps. Returns detailed "
        "route information including distance, duration, traffic delays, and turn-by-turn directions."
    ),
)
async def calculate_route(args: CalculateRouteArgs, adapter: RouteProviderAdapter, **kwargs) -> ToolResult:
    logger.info(f"Calculating route: {args.origin} -> {args.destination}")
    route = await adapter.fetch_route(
        build_request(args.origin, args.destination, args.waypoints, args.options)
    )
    return ToolResult(
        payload={
            "route": {
                "summary": route.summary,
                **timing_blocks(route),
                "steps": steps_block(route),
                "warnings": list(route.warnings),
                "polyline": route.polyline,
            },
        },
        metadata={
            "trafficModel": args.options.traffic_model.value,
            "requestedWaypoints": len(args.waypoints),
        },
    )
