"""Shared test doubles — raw directions payloads, fake provider and clock."""
from typing import Callable, List, Optional


def raw_route(
    distance: int = 10000,
    duration: int = 600,
    in_traffic: Optional[int] = None,
    summary: str = "I-90 E",
    steps: Optional[List[dict]] = None,
    warnings: Optional[List[str]] = None,
) -> dict:
    """Build one route in the Directions JSON shape."""
    leg = {
        "distance": {"value": distance, "text": f"{distance / 1000:.1f} km"},
        "duration": {"value": duration, "text": f"{duration // 60} mins"},
        "steps": steps if steps is not None else [
            {
                "html_instructions": "Head <b>north</b> on Main St",
                "distance": {"text": "0.2 km"},
                "duration": {"text": "1 min"},
            },
            {
                "html_instructions": "Turn <b>left</b> onto <div>Oak Ave</div>",
                "distance": {"text": "1.0 km"},
                "duration": {"text": "2 mins"},
                "maneuver": "turn-left",
            },
        ],
    }
    if in_traffic is not None:
        leg["duration_in_traffic"] = {"value": in_traffic, "text": f"{in_traffic // 60} mins"}
    return {
        "summary": summary,
        "legs": [leg],
        "overview_polyline": {"points": "a~l~Fjk~uOwHJy@P"},
        "warnings": warnings or [],
        "copyrights": "Map data ©2026",
    }


class FakeProvider:
    """In-memory RouteProvider; `responder` maps a recorded call to a raw route."""

    def __init__(self, responder: Optional[Callable[[dict], dict]] = None):
        self.calls: List[dict] = []
        self.responder = responder or (lambda call: raw_route(in_traffic=660))

    async def directions(self, origin, destination, waypoints, avoid, departure_time,
                         traffic_model, alternatives=False):
        call = {
            "origin": origin,
            "destination": destination,
            "waypoints": list(waypoints),
            "avoid": list(avoid),
            "departure_time": departure_time,
            "traffic_model": traffic_model,
            "alternatives": alternatives,
        }
        self.calls.append(call)
        return self.responder(call)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds

