"""Consistent distance, duration and money rendering."""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict


def _round1(value: float) -> float:
    return float(Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def km_text(meters: int) -> str:
    return f"{_round1(meters / 1000):.1f} km"


def format_distance(meters: int) -> Dict[str, Any]:
    return {
        "meters": meters,
        "kilometers": _round1(meters / 1000),
        "text": km_text(meters),
    }


def format_duration(seconds: int) -> str:
    """'Nh Mm' for an hour or more, 'Mm' below that, '0m' for zero or negative."""
    if not seconds or seconds < 0:
        return "0m"
    hours, rest = divmod(int(seconds), 3600)
    minutes = rest // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def duration_block(seconds: int) -> Dict[str, Any]:
    return {"seconds": seconds, "text": format_duration(seconds)}


def money_block(amount: float, currency: str = "USD") -> Dict[str, Any]:
    return {"amount": amount, "currency": currency, "text": f"${amount:.2f}"}
