"""Live traffic tool — current travel time against free-flow and a condition label."""
import logging

from ...aggregator import classify_traffic
from ...models import TrafficModel
from ...provider import RouteProviderAdapter
from ..args import LiveTrafficArgs, RouteOptions
from ..formatting import duration_block, km_text
from ..registry import register_tool, ToolResult
from .route import build_request

logger = logging.getLogger(__name__)


@register_tool(
    "get_live_traffic",
    LiveTrafficArgs,
    description=(
        "Get current traffic conditions and travel time analysis for a specific route. "
        "Includes traffic delays and conditions."
    ),
)
async def get_live_traffic(args: LiveTrafficArgs, adapter: RouteProviderAdapter, **kwargs) -> ToolResult:
    logger.info(f"Getting traffic info: {args.origin} -> {args.destination} at {args.departure_time}")
    options = RouteOptions(departure_time=args.departure_time, traffic_model=TrafficModel.BEST_GUESS)
    route = await adapter.fetch_route(build_request(args.origin, args.destination, options=options))
    condition = classify_traffic(route)

    return ToolResult(
        payload={
            "traffic": {
                "currentDuration": duration_block(route.duration_seconds),
                "durationInTraffic": duration_block(route.duration_in_traffic_seconds),
                "trafficDelay": duration_block(route.traffic_delay_seconds),
                "trafficCondition": condition.value,
                "route": {
                    "summary": route.summary,
                    "distance": km_text(route.distance_meters),
                },
            },
        },
        metadata={
            "departureTime": args.departure_time,
            "origin": args.origin,
            "destination": args.destination,
        },
    )
