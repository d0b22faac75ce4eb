"""Tests for the area index and route recommendation."""

import pytest

from dextracker.engine.area_index import (
    build_area_index,
    iter_areas,
    list_locations,
    recommend_route,
    seed_area_index,
    sort_locations,
    update_area,
)
from dextracker.models.failure import InvariantViolation
from dextracker.models.filters import FilterState
from dextracker.models.pokemon import LocationType, Pokemon, TimeOfDay
from dextracker.models.projection import Area

LAND = LocationType.LAND
WATER = LocationType.WATER
DAY = TimeOfDay.DAY
NIGHT = TimeOfDay.NIGHT


def _catch_everything(pokemon: Pokemon) -> None:
    for variant in pokemon.variants:
        variant.caught = True


class TestSortLocations:
    def test_routes_numeric_then_names(self) -> None:
        assert sort_locations(["Pallet Town", "Route 12", "Route 3"]) == [
            "Route 3",
            "Route 12",
            "Pallet Town",
        ]

    def test_case_insensitive_route_match(self) -> None:
        assert sort_locations(["Cerulean City", "route 4"]) == ["route 4", "Cerulean City"]

    def test_route_suffix_is_a_name(self) -> None:
        """Only bare "Route <n>" counts as a route."""
        assert sort_locations(["Route 5 Gate", "Route 9"]) == ["Route 9", "Route 5 Gate"]

    def test_duplicates_dropped(self) -> None:
        assert sort_locations(["Route 1", "Route 1", "Cave"]) == ["Route 1", "Cave"]


class TestListLocations:
    def test_distinct_places(self, sample_catalogue: list[Pokemon]) -> None:
        assert list_locations(sample_catalogue) == [
            "Route 1",
            "Pokémon Tower",
            "Viridian Forest",
        ]


class TestBuildAreaIndex:
    def test_seed_has_every_area(self, sample_catalogue: list[Pokemon]) -> None:
        index = seed_area_index(sample_catalogue)

        assert index == {
            "Route 1": {LAND: {DAY: None}, WATER: {NIGHT: None}},
            "Viridian Forest": {LAND: {DAY: None}},
            "Pokémon Tower": {LAND: {NIGHT: None}},
        }

    def test_iter_areas_in_display_order(self, sample_catalogue: list[Pokemon]) -> None:
        areas = iter_areas(seed_area_index(sample_catalogue))

        assert areas == [
            Area("Route 1", LAND, DAY),
            Area("Route 1", WATER, NIGHT),
            Area("Pokémon Tower", LAND, NIGHT),
            Area("Viridian Forest", LAND, DAY),
        ]

    def test_chances(self, sample_catalogue: list[Pokemon]) -> None:
        index = build_area_index(sample_catalogue)

        assert index["Route 1"][LAND][DAY] == 1
        assert index["Route 1"][WATER][NIGHT] == 1
        assert index["Viridian Forest"][LAND][DAY] == 1
        # Gastly alone: 0.005 * (0.6 + 0.05)
        assert index["Pokémon Tower"][LAND][NIGHT] == 308

    def test_complete_area_is_none(self, sample_catalogue: list[Pokemon]) -> None:
        _catch_everything(sample_catalogue[3])

        index = build_area_index(sample_catalogue)

        assert index["Route 1"][WATER][NIGHT] is None


class TestUpdateArea:
    def test_recomputes_one_area(self, sample_catalogue: list[Pokemon]) -> None:
        index = build_area_index(sample_catalogue)
        _catch_everything(sample_catalogue[0])

        update_area(index, sample_catalogue, Area("Route 1", LAND, DAY))

        assert index["Route 1"][LAND][DAY] == 308
        # Untouched until its own update
        assert index["Viridian Forest"][LAND][DAY] == 1

    def test_unknown_area_rejected(self, sample_catalogue: list[Pokemon]) -> None:
        index = build_area_index(sample_catalogue)

        with pytest.raises(InvariantViolation):
            update_area(index, sample_catalogue, Area("Route 1", WATER, DAY))


class TestRecommendRoute:
    def test_smallest_chance_wins(self) -> None:
        index = {
            "Route 1": {LAND: {DAY: 40}},
            "Route 2": {WATER: {NIGHT: 7}},
            "Cave": {LAND: {DAY: 12}},
        }

        assert recommend_route(index, FilterState()) == Area("Route 2", WATER, NIGHT)

    def test_tie_goes_to_first_place(self) -> None:
        index = {
            "Pallet Town": {LAND: {DAY: 3}},
            "Route 2": {WATER: {NIGHT: 3}},
        }

        assert recommend_route(index, FilterState()) == Area("Route 2", WATER, NIGHT)

    def test_tie_goes_to_land(self) -> None:
        index = {"Route 1": {LAND: {NIGHT: 5}, WATER: {DAY: 5}}}

        assert recommend_route(index, FilterState()) == Area("Route 1", LAND, NIGHT)

    def test_best_time_per_terrain(self) -> None:
        index = {"Route 1": {LAND: {DAY: 9, NIGHT: 4}}}

        assert recommend_route(index, FilterState()) == Area("Route 1", LAND, NIGHT)

    def test_time_filter_restricts(self) -> None:
        index = {
            "Route 1": {LAND: {DAY: 2, NIGHT: 9}},
            "Route 2": {LAND: {NIGHT: 6}},
        }

        assert recommend_route(index, FilterState(time=NIGHT)) == Area("Route 2", LAND, NIGHT)

    def test_complete_areas_skipped(self) -> None:
        index = {
            "Route 1": {LAND: {DAY: None}},
            "Route 2": {LAND: {DAY: 50}},
        }

        assert recommend_route(index, FilterState()) == Area("Route 2", LAND, DAY)

    def test_none_when_everything_caught(self, sample_catalogue: list[Pokemon]) -> None:
        for pokemon in sample_catalogue:
            _catch_everything(pokemon)

        index = build_area_index(sample_catalogue)

        assert recommend_route(index, FilterState()) is None

    def test_from_catalogue(self, sample_catalogue: list[Pokemon]) -> None:
        index = build_area_index(sample_catalogue)

        assert recommend_route(index, FilterState()) == Area("Route 1", LAND, DAY)
        assert recommend_route(index, FilterState(time=NIGHT)) == Area("Route 1", WATER, NIGHT)
