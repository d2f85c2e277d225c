"""Tests for aggregator.py — ranking, cost estimation, traffic buckets."""
import pytest

from mapsgate.aggregator import classify_traffic, compare, estimate_cost, round_money
from mapsgate.errors import InvalidInput
from mapsgate.models import ComparisonEntry, Route, TrafficCondition


def _route(distance=10000, duration=600, in_traffic=600, summary="r"):
    return Route(
        summary=summary,
        distance_meters=distance,
        duration_seconds=duration,
        duration_in_traffic_seconds=in_traffic,
    )


def _entry(label, **kwargs):
    return ComparisonEntry(label=label, route=_route(**kwargs))


class TestCompare:
    def test_single_entry(self):
        result = compare([_entry("Default Route")])
        assert result.recommended.label == "Default Route"
        assert result.fastest.label == "Default Route"
        assert result.shortest.label == "Default Route"
        assert result.time_saved_seconds == 0

    def test_fastest_and_shortest_differ(self):
        result = compare([
            _entry("Default Route", distance=20000, in_traffic=1500),
            _entry("No tolls", distance=15000, in_traffic=1800),
            _entry("Highway", distance=25000, in_traffic=1200),
        ])
        assert result.recommended.label == "Highway"
        assert result.fastest_index == 2
        assert result.shortest.label == "No tolls"
        assert result.time_saved_seconds == 300

    def test_tie_prefers_first_listed(self):
        result = compare([
            _entry("Default Route", distance=9000, in_traffic=900),
            _entry("Other", distance=9000, in_traffic=900),
        ])
        assert result.recommended_index == 0
        assert result.shortest_index == 0

    def test_tie_after_first(self):
        result = compare([
            _entry("Default Route", in_traffic=1000),
            _entry("B", in_traffic=800),
            _entry("C", in_traffic=800),
        ])
        assert result.recommended.label == "B"

    def test_entries_keep_request_order(self):
        entries = [_entry("Default Route"), _entry("X"), _entry("Y")]
        assert [e.label for e in compare(entries).entries] == ["Default Route", "X", "Y"]

    def test_empty(self):
        with pytest.raises(InvalidInput):
            compare([])


class TestEstimateCost:
    def test_hundred_km(self):
        estimate = estimate_cost(_route(distance=100000), 8.0, 1.50)
        assert estimate.fuel_cost == 12.00
        assert estimate.toll_cost == 5.00
        assert estimate.total_cost == 17.00
        assert estimate.fuel_needed_liters == 8.0
        assert estimate.assumptions == {
            "fuelEfficiency": 8.0, "fuelPrice": 1.50, "tollRatePerKm": 0.05,
        }

    def test_rounds_to_cents(self):
        estimate = estimate_cost(_route(distance=12340), 7.3, 1.87)
        assert estimate.fuel_cost == 1.68  # 1.6845...
        assert estimate.toll_cost == 0.62  # 0.617
        assert estimate.total_cost == 2.30  # 2.3015...

    def test_zero_distance(self):
        estimate = estimate_cost(_route(distance=0), 8.0, 1.50)
        assert estimate.total_cost == 0.0

    @pytest.mark.parametrize("efficiency,price", [
        (2.9, 1.5), (25.1, 1.5), (8.0, 0.49), (8.0, 5.01),
    ])
    def test_out_of_range_rejected(self, efficiency, price):
        with pytest.raises(InvalidInput):
            estimate_cost(_route(), efficiency, price)

    def test_range_bounds_accepted(self):
        estimate_cost(_route(), 3.0, 0.5)
        estimate_cost(_route(), 25.0, 5.0)


class TestRoundMoney:
    def test_half_rounds_up(self):
        assert round_money(0.125) == 0.13
        assert round_money(2.675) == 2.68

    def test_half_rounds_away_from_zero_for_negatives(self):
        assert round_money(-0.125) == -0.13


class TestClassifyTraffic:
    def test_exact_ten_percent_is_moderate(self):
        assert classify_traffic(_route(duration=3600, in_traffic=3960)) is TrafficCondition.MODERATE

    def test_just_under_ten_percent_is_light(self):
        assert classify_traffic(_route(duration=3600, in_traffic=3959)) is TrafficCondition.LIGHT

    def test_thirty_percent_is_heavy(self):
        assert classify_traffic(_route(duration=3600, in_traffic=4680)) is TrafficCondition.HEAVY

    def test_fifty_percent_is_severe(self):
        assert classify_traffic(_route(duration=3600, in_traffic=5400)) is TrafficCondition.SEVERE

    def test_faster_than_free_flow_is_light(self):
        assert classify_traffic(_route(duration=3600, in_traffic=3000)) is TrafficCondition.LIGHT

    def test_zero_duration_rejected(self):
        with pytest.raises(InvalidInput):
            classify_traffic(_route(duration=0, in_traffic=120))
