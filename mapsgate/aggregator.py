"""Route aggregation — comparison ranking, trip cost and traffic classification.

Pure functions over already-fetched routes; no I/O happens here.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Sequence

from .errors import InvalidInput
from .models import (
    ComparisonEntry, ComparisonResult, CostEstimate, Route, TrafficCondition,
)

TOLL_RATE_PER_KM = 0.05  # flat approximation, not a toll-road lookup

FUEL_EFFICIENCY_RANGE = (3.0, 25.0)  # L/100km
FUEL_PRICE_RANGE = (0.5, 5.0)  # per liter


def round_money(value: float) -> float:
    """Round to cents, halves away from zero."""
    return float(Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _first_min(entries: Sequence[ComparisonEntry], key: Callable[[Route], int]) -> int:
    best = 0
    for i in range(1, len(entries)):
        # strict < keeps the earliest entry on ties
        if key(entries[i].route) < key(entries[best].route):
            best = i
    return best


def compare(entries: Sequence[ComparisonEntry]) -> ComparisonResult:
    if not entries:
        raise InvalidInput("Nothing to compare: no routes were supplied")
    fastest = _first_min(entries, lambda r: r.duration_in_traffic_seconds)
    shortest = _first_min(entries, lambda r: r.distance_meters)
    return ComparisonResult(
        entries=tuple(entries),
        recommended_index=fastest,
        fastest_index=fastest,
        shortest_index=shortest,
    )


def estimate_cost(route: Route, fuel_efficiency: float, fuel_price: float) -> CostEstimate:
    lo, hi = FUEL_EFFICIENCY_RANGE
    if not lo <= fuel_efficiency <= hi:
        raise InvalidInput(f"fuelEfficiency must be between {lo} and {hi} L/100km")
    lo, hi = FUEL_PRICE_RANGE
    if not lo <= fuel_price <= hi:
        raise InvalidInput(f"fuelPrice must be between {lo} and {hi} per liter")

    distance_km = route.distance_meters / 1000
    fuel_needed = (distance_km / 100) * fuel_efficiency
    fuel_cost = fuel_needed * fuel_price
    toll_cost = distance_km * TOLL_RATE_PER_KM
    return CostEstimate(
        fuel_cost=round_money(fuel_cost),
        toll_cost=round_money(toll_cost),
        total_cost=round_money(fuel_cost + toll_cost),
        distance_km=distance_km,
        fuel_needed_liters=fuel_needed,
        assumptions={
            "fuelEfficiency": fuel_efficiency,
            "fuelPrice": fuel_price,
            "tollRatePerKm": TOLL_RATE_PER_KM,
        },
    )


def classify_traffic(route: Route) -> TrafficCondition:
    """Bucket the traffic delay relative to the free-flow duration.

    Comparisons are done in integers so that a delay of exactly 10% lands in
    "moderate" rather than drifting across the boundary in floating point.
    """
    duration = route.duration_seconds
    if duration <= 0:
        raise InvalidInput("Cannot classify traffic for a route with zero duration")
    delay = route.duration_in_traffic_seconds - duration
    if delay * 10 < duration:
        return TrafficCondition.LIGHT
    if delay * 10 < duration * 3:
        return TrafficCondition.MODERATE
    if delay * 2 < duration:
        return TrafficCondition.HEAVY
    return TrafficCondition.SEVERE
