"""Fetch the default route plus each option set concurrently and rank them."""
import asyncio
import logging

from ...aggregator import compare
from ...models import ComparisonEntry
from ...provider import RouteProviderAdapter
from ..args import CompareRoutesArgs
from ..formatting import format_duration, km_text
from ..registry import register_tool, ToolResult
from .route import build_request, timing_blocks

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "Default Route"
RECOMMENDATION_REASON = "Fastest travel time considering current traffic conditions"


@register_tool(
    "compare_routes",
    CompareRoutesArgs,
    description=(
        "Compare multiple route alternatives with different routing options "
        "(tolls, highways, traffic models) to find the best option."
    ),
)
async def compare_routes(args: CompareRoutesArgs, adapter: RouteProviderAdapter, **kwargs) -> ToolResult:
    logger.info(f"Comparing routes: {args.origin} -> {args.destination} "
                f"({len(args.compare_options) + 1} option sets)")

    requests = [build_request(args.origin, args.destination, args.waypoints, alternatives=True)]
    labels = [DEFAULT_LABEL]
    sources = ["default"]
    for i, option in enumerate(args.compare_options):
        requests.append(build_request(args.origin, args.destination, args.waypoints, option))
        labels.append(option.name or f"Option {i + 1}")
        sources.append(option.model_dump(by_alias=True, exclude_unset=True, mode="json"))

    # Await every leg; results line up with labels by index, not arrival order
    results = await asyncio.gather(
        *(adapter.fetch_route(req) for req in requests), return_exceptions=True,
    )
    for label, outcome in zip(labels, results):
        if isinstance(outcome, BaseException):
            logger.error(f"Comparison leg '{label}' failed: {outcome}")
            raise outcome

    comparison = compare([
        ComparisonEntry(label=label, route=route, source_options=source)
        for label, route, source in zip(labels, results, sources)
    ])

    fastest = comparison.fastest
    shortest = comparison.shortest
    return ToolResult(
        payload={
            "comparison": {
                "routes": [
                    {
                        "id": i,
                        "label": entry.label,
                        "summary": entry.route.summary,
                        **timing_blocks(entry.route),
                        "options": entry.source_options,
                    }
                    for i, entry in enumerate(comparison.entries)
                ],
                "recommendation": {
                    "recommended": {
                        "id": comparison.recommended_index,
                        "label": comparison.recommended.label,
                    },
                    "reason": RECOMMENDATION_REASON,
                    "timeSaved": {
                        "seconds": comparison.time_saved_seconds,
                        "text": format_duration(comparison.time_saved_seconds),
                    },
                },
                "summary": {
                    "fastestRoute": {
                        "label": fastest.label,
                        "duration": format_duration(fastest.route.duration_in_traffic_seconds),
                    },
                    "shortestRoute": {
                        "label": shortest.label,
                        "distance": km_text(shortest.route.distance_meters),
                    },
                    "totalRoutesCompared": len(comparison.entries),
                },
            },
        },
        metadata={
            "routesCompared": len(comparison.entries),
            "origin": args.origin,
            "destination": args.destination,
        },
    )
