"""Tests for the display projector."""

import copy
from collections.abc import Callable

import pytest

from dextracker.engine.projector import build_candidates, project, sort_by_rarity
from dextracker.models.filters import FilterState
from dextracker.models.pokemon import (
    LocationType,
    Pokemon,
    Rarity,
    TimeOfDay,
    VariantType,
)
from dextracker.models.projection import freeze_group


@pytest.fixture
def route_one_land_day() -> FilterState:
    return FilterState(location="Route 1", time=TimeOfDay.DAY, type=LocationType.LAND)


def _row_ids(group) -> list[list[int | None]]:
    return [[p.id if p is not None else None for p in line] for line in group.lines]


class TestBuildCandidates:
    def test_no_filters_shows_nothing(self, sample_catalogue: list[Pokemon]) -> None:
        assert build_candidates(sample_catalogue, FilterState()) == []

    def test_evolutions_ride_along(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        """Evolutions are included even though they have no matching location."""
        candidates = build_candidates(sample_catalogue, route_one_land_day)

        assert [p.id for p in candidates] == [1, 2, 3, 92, 93]

    def test_variant_filter_drops_pokemon_without_it(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        route_one_land_day.variant = VariantType.SHINY

        candidates = build_candidates(sample_catalogue, route_one_land_day)

        assert [p.id for p in candidates] == [1, 2]


class TestSortByRarity:
    def test_stable_rarity_order(self, make_pokemon: Callable[..., Pokemon]) -> None:
        pokemon = [
            make_pokemon(1, rarity=Rarity.ULTRA_BEAST),
            make_pokemon(2, rarity=Rarity.RARE),
            make_pokemon(3, rarity=Rarity.COMMON),
            make_pokemon(4, rarity=Rarity.LEGENDARY),
            make_pokemon(5, rarity=Rarity.COMMON),
            make_pokemon(6, rarity=Rarity.RARE),
        ]

        assert [p.id for p in sort_by_rarity(pokemon)] == [3, 5, 2, 6, 4, 1]


class TestProject:
    def test_groups_in_display_order(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        groups = project(sample_catalogue, route_one_land_day)

        assert [g.type for g in groups] == [
            VariantType.NORMAL,
            VariantType.SHADOW,
            VariantType.SHINY,
        ]

    def test_rows_grouped_by_evolution_line(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        normal = project(sample_catalogue, route_one_land_day)[0]

        assert _row_ids(normal) == [
            [1, 2, 3, None, None, None],
            [92, 93, None, None, None, None],
        ]

    def test_rare_lines_after_common_lines(self, make_pokemon: Callable[..., Pokemon]) -> None:
        catalogue = [
            make_pokemon(10, rarity=Rarity.RARE, locations=[("Route 1", "Land", "Day")]),
            make_pokemon(20, locations=[("Route 1", "Land", "Day")]),
        ]

        groups = project(catalogue, FilterState(location="Route 1"))

        assert _row_ids(groups[0]) == [
            [20, None, None, None, None, None],
            [10, None, None, None, None, None],
        ]

    def test_group_only_contains_pokemon_with_that_variant(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        shiny = project(sample_catalogue, route_one_land_day)[2]

        assert _row_ids(shiny) == [[1, 2, None, None, None, None]]

    def test_variant_filter_keeps_one_group(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        route_one_land_day.variant = VariantType.SHADOW

        groups = project(sample_catalogue, route_one_land_day)

        assert [g.type for g in groups] == [VariantType.SHADOW]
        assert _row_ids(groups[0]) == [[92, 93, None, None, None, None]]

    def test_no_filters_no_groups(self, sample_catalogue: list[Pokemon]) -> None:
        assert project(sample_catalogue, FilterState()) == []

    def test_hide_caught_omits_fully_caught_group(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        for pokemon in sample_catalogue[:2]:
            pokemon.get_variant(VariantType.SHINY).caught = True

        shown = project(sample_catalogue, route_one_land_day, hide_caught=False)
        hidden = project(sample_catalogue, route_one_land_day, hide_caught=True)

        assert VariantType.SHINY in [g.type for g in shown]
        assert VariantType.SHINY not in [g.type for g in hidden]

    def test_hide_caught_keeps_partially_caught_group(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        sample_catalogue[0].get_variant(VariantType.SHINY).caught = True

        groups = project(sample_catalogue, route_one_land_day, hide_caught=True)

        assert VariantType.SHINY in [g.type for g in groups]

    def test_idempotent(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        first = project(sample_catalogue, route_one_land_day)
        second = project(sample_catalogue, route_one_land_day)

        assert [freeze_group(g) for g in first] == [freeze_group(g) for g in second]

    def test_does_not_mutate_catalogue(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        before = copy.deepcopy(sample_catalogue)

        project(sample_catalogue, route_one_land_day, hide_caught=True)

        assert sample_catalogue == before

    def test_toggle_twice_restores_projection(
        self, sample_catalogue: list[Pokemon], route_one_land_day: FilterState
    ) -> None:
        before = [freeze_group(g) for g in project(sample_catalogue, route_one_land_day)]

        variant = sample_catalogue[4].get_variant(VariantType.SHADOW)
        variant.caught = not variant.caught
        toggled = [freeze_group(g) for g in project(sample_catalogue, route_one_land_day)]
        variant.caught = not variant.caught
        after = [freeze_group(g) for g in project(sample_catalogue, route_one_land_day)]

        assert toggled != before
        assert after == before
