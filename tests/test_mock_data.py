"""Tests for the fallback data generator."""
from __future__ import annotations

import random

import pytest

from tirthyatra.core.schemas import Coordinates
from tirthyatra.mock_data import CURATED_TEMPLES, MockDataGenerator

CENTER = Coordinates(lat=25.3176, lng=82.9739)


def _generator(seed: int = 11) -> MockDataGenerator:
    return MockDataGenerator(random.Random(seed))


class TestTemples:
    def test_curated_destination_uses_curated_names(self):
        temples = _generator().temples("Varanasi", CENTER)
        curated = {name for name, _, _ in CURATED_TEMPLES["varanasi"]}
        assert 4 <= len(temples) <= 6
        assert {temple.name for temple in temples} <= curated

    def test_generic_destination_is_templated(self):
        temples = _generator().temples("xyzzyville", CENTER)
        assert 4 <= len(temples) <= 6
        assert all("Xyzzyville" in temple.name for temple in temples)
        assert all(temple.location == "Xyzzyville" for temple in temples)

    def test_coordinates_stay_near_center(self):
        for temple in _generator().temples("Varanasi", CENTER):
            assert abs(temple.coordinates.lat - CENTER.lat) <= 0.05 + 1e-9
            assert abs(temple.coordinates.lng - CENTER.lng) <= 0.05 + 1e-9

    def test_same_seed_same_output(self):
        assert _generator(3).temples("Puri", CENTER) == _generator(3).temples("Puri", CENTER)


class TestHotels:
    def test_prices_increase_with_budget_tier(self):
        averages = []
        for budget in ("low", "mid", "high", "luxury"):
            hotels = _generator(5).hotels("Varanasi", budget)
            averages.append(sum(hotel.price for hotel in hotels) / len(hotels))
        assert averages == sorted(averages)
        assert averages[0] < averages[-1]

    @pytest.mark.parametrize("seed", range(5))
    def test_hotel_records_are_well_formed(self, seed):
        for hotel in _generator(seed).hotels("Tirupati", "mid"):
            assert hotel.price > 0
            assert 0 <= hotel.rating <= 5
            assert hotel.image_url

    def test_unknown_budget_uses_lowest_multiplier(self):
        assert _generator(9).hotels("Puri", "premium") == _generator(9).hotels("Puri", "low")


class TestTransport:
    @pytest.mark.parametrize("mode", ["trains", "flights", "buses"])
    def test_transport_types(self, mode):
        options = getattr(_generator(), mode)("Delhi", "Varanasi")
        expected = {"trains": "train", "flights": "flight", "buses": "bus"}[mode]
        assert 4 <= len(options) <= 6
        assert all(option.type == expected for option in options)
        assert all(option.price > 0 for option in options)
