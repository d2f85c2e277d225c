"""Cost tool — fuel, toll and total trip cost for a vehicle profile."""
import logging

from ...aggregator import TOLL_RATE_PER_KM, estimate_cost
from ...provider import RouteProviderAdapter
from ..args import EstimateCostsArgs
from ..formatting import format_duration, km_text, money_block
from ..registry import register_tool, ToolResult
from .route import build_request

logger = logging.getLogger(__name__)


@register_tool(
    "estimate_costs",
    EstimateCostsArgs,
    description=(
        "Calculate comprehensive trip costs including fuel, tolls, and total expenses "
        "based on vehicle specifications."
    ),
)
async def estimate_costs(args: EstimateCostsArgs, adapter: RouteProviderAdapter, **kwargs) -> ToolResult:
    logger.info(f"Estimating costs for route: {args.origin} -> {args.destination}")
    route = await adapter.fetch_route(build_request(args.origin, args.destination))

    vehicle = args.vehicle_options
    estimate = estimate_cost(route, vehicle.fuel_efficiency, vehicle.fuel_price)
    distance = km_text(route.distance_meters)
    toll_note = f"Estimated based on ${TOLL_RATE_PER_KM:.2f}/km"

    return ToolResult(
        payload={
            "costs": {
                "fuel": money_block(estimate.fuel_cost),
                "tolls": {**money_block(estimate.toll_cost), "note": toll_note},
                "total": money_block(estimate.total_cost),
                "breakdown": {
                    "distance": distance,
                    "fuelNeeded": f"{estimate.fuel_needed_liters:.1f} L",
                    "fuelEfficiency": f"{vehicle.fuel_efficiency} L/100km",
                    "fuelPrice": f"${vehicle.fuel_price}/L",
                },
            },
            "route": {
                "distance": distance,
                "duration": format_duration(route.duration_seconds),
                "summary": route.summary,
            },
        },
        metadata={
            "assumptions": {
                **estimate.assumptions,
                "tollEstimate": f"Estimated at ${TOLL_RATE_PER_KM:.2f} per kilometer",
            },
        },
    )
