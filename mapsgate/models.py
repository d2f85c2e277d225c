"""Domain value types shared by the provider adapter, aggregator and tools."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple, Union

from .errors import InvalidArgument

MAX_WAYPOINTS = 8
DEPARTURE_NOW = "now"


class TrafficModel(str, Enum):
    BEST_GUESS = "best_guess"
    PESSIMISTIC = "pessimistic"
    OPTIMISTIC = "optimistic"


class TrafficCondition(str, Enum):
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    SEVERE = "severe"


@dataclass(frozen=True)
class RouteRequest:
    origin: str
    destination: str
    waypoints: Tuple[str, ...] = ()
    avoid_tolls: bool = False
    avoid_highways: bool = False
    departure_time: str = DEPARTURE_NOW
    traffic_model: TrafficModel = TrafficModel.BEST_GUESS
    want_alternatives: bool = False

    def __post_init__(self):
        if not self.origin or not self.origin.strip():
            raise InvalidArgument("Origin and destination are required and cannot be empty")
        if not self.destination or not self.destination.strip():
            raise InvalidArgument("Origin and destination are required and cannot be empty")
        if len(self.waypoints) > MAX_WAYPOINTS:
            raise InvalidArgument(f"At most {MAX_WAYPOINTS} waypoints are supported")

    @property
    def avoid(self) -> List[str]:
        """Avoid-list in the fixed order tolls, highways."""
        avoid = []
        if self.avoid_tolls:
            avoid.append("tolls")
        if self.avoid_highways:
            avoid.append("highways")
        return avoid


@dataclass(frozen=True)
class Step:
    instruction: str
    distance_text: str
    duration_text: str
    maneuver: str = "continue"


@dataclass(frozen=True)
class Route:
    summary: str
    distance_meters: int
    duration_seconds: int
    duration_in_traffic_seconds: int
    steps: Tuple[Step, ...] = ()
    polyline: str = ""
    warnings: Tuple[str, ...] = ()
    copyrights: str = ""

    @property
    def traffic_delay_seconds(self) -> int:
        return self.duration_in_traffic_seconds - self.duration_seconds


@dataclass(frozen=True)
class ComparisonEntry:
    label: str
    route: Route
    # Option set that produced the route, or "default"
    source_options: Union[str, Dict[str, Any]] = "default"


@dataclass(frozen=True)
class ComparisonResult:
    entries: Tuple[ComparisonEntry, ...]
    recommended_index: int
    fastest_index: int
    shortest_index: int

    @property
    def recommended(self) -> ComparisonEntry:
        return self.entries[self.recommended_index]

    @property
    def fastest(self) -> ComparisonEntry:
        return self.entries[self.fastest_index]

    @property
    def shortest(self) -> ComparisonEntry:
        return self.entries[self.shortest_index]

    @property
    def time_saved_seconds(self) -> int:
        """Traffic-aware seconds saved by the recommendation over the default route."""
        return (
            self.entries[0].route.duration_in_traffic_seconds
            - self.recommended.route.duration_in_traffic_seconds
        )


@dataclass(frozen=True)
class CostEstimate:
    fuel_cost: float
    toll_cost: float
    total_cost: float
    distance_km: float
    fuel_needed_liters: float
    assumptions: Dict[str, float] = field(default_factory=dict)
