"""Argument models for the routing tools.

Each tool validates its raw arguments against one of these before the handler
runs; the same models generate the declarative input schemas.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import DEPARTURE_NOW, MAX_WAYPOINTS, TrafficModel
from ..provider import departure_param

EMPTY_LOCATION = "Origin and destination are required and cannot be empty"


class _Args(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class _Endpoints(_Args):
    origin: str = Field(
        description='Starting location (address, place name, or coordinates like "40.7589,-73.9851")',
    )
    destination: str = Field(description="Destination location (address, place name, or coordinates)")

    @field_validator("origin", "destination")
    @classmethod
    def _require_location(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError(EMPTY_LOCATION)
        return v


def _check_departure(v: Optional[str]) -> str:
    if v is None or not v.strip():
        return DEPARTURE_NOW
    try:
        departure_param(v)
    except ValueError:
        raise ValueError('departureTime must be "now", epoch seconds or an ISO 8601 datetime')
    return v.strip()


class RouteOptions(_Args):
    avoid_tolls: bool = Field(False, alias="avoidTolls", description="Avoid toll roads")
    avoid_highways: bool = Field(False, alias="avoidHighways", description="Avoid highways/freeways")
    departure_time: Optional[str] = Field(
        DEPARTURE_NOW, alias="departureTime", description='ISO datetime or "now" for traffic prediction',
    )
    traffic_model: TrafficModel = Field(
        TrafficModel.BEST_GUESS, alias="trafficModel", description="Traffic prediction model",
    )

    @field_validator("departure_time")
    @classmethod
    def _valid_departure(cls, v: Optional[str]) -> str:
        return _check_departure(v)


class CompareOption(RouteOptions):
    name: Optional[str] = Field(None, description="Human-readable name for this route option")


class _WithWaypoints(_Endpoints):
    waypoints: List[str] = Field(
        default_factory=list,
        description="Optional intermediate stops along the route",
        json_schema_extra={"maxItems": MAX_WAYPOINTS},
    )

    @field_validator("waypoints")
    @classmethod
    def _clean_waypoints(cls, v: List[str]) -> List[str]:
        cleaned = [w.strip() for w in v if w and w.strip()]
        if len(cleaned) > MAX_WAYPOINTS:
            raise ValueError(f"At most {MAX_WAYPOINTS} waypoints are supported")
        return cleaned


class CalculateRouteArgs(_WithWaypoints):
    options: RouteOptions = Field(default_factory=RouteOptions)


class CompareRoutesArgs(_WithWaypoints):
    compare_options: List[CompareOption] = Field(
        default_factory=list,
        alias="compareOptions",
        description="Array of different routing options to compare",
    )


class LiveTrafficArgs(_Endpoints):
    departure_time: Optional[str] = Field(
        DEPARTURE_NOW,
        alias="departureTime",
        description='Departure time for traffic analysis ("now" or ISO 8601 format)',
    )

    @field_validator("departure_time")
    @classmethod
    def _valid_departure(cls, v: Optional[str]) -> str:
        return _check_departure(v)


class VehicleOptions(_Args):
    fuel_efficiency: float = Field(
        8.0, ge=3.0, le=25.0, alias="fuelEfficiency",
        description="Vehicle fuel consumption in liters per 100km (e.g., 8.0)",
    )
    fuel_price: float = Field(
        1.50, ge=0.5, le=5.0, alias="fuelPrice",
        description="Current fuel price per liter in USD (e.g., 1.50)",
    )


class EstimateCostsArgs(_Endpoints):
    vehicle_options: VehicleOptions = Field(
        default_factory=VehicleOptions,
        alias="vehicleOptions",
        description="Vehicle specifications for cost calculation",
    )
