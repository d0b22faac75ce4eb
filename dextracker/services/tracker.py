"""
Tracker context.

Owns the single mutable catalogue and filter state for a session and
recomputes derived views through the pure engine. Observers (the
rendering side) receive an immutable snapshot after every change.

Mutation discipline:
- Filters and the hide-caught preference change only via set_* methods
- Caught flags change only via toggle_caught or apply_import
- Persisting the catalogue after a change is the caller's job
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, fields, replace

from dextracker.engine.area_index import (
    build_area_index,
    list_locations,
    recommend_route,
    update_area,
)
from dextracker.engine.probability import catalogue_progress, compute_route_probability
from dextracker.engine.projector import build_candidates, group_by_variant
from dextracker.models.filters import FilterState
from dextracker.models.pokemon import Pokemon, VariantType
from dextracker.models.projection import (
    Area,
    AreaIndex,
    GroupView,
    Progress,
    RouteEstimate,
    freeze_group,
)
from dextracker.parsers.save_transfer import encode_save, import_save

logger = logging.getLogger(__name__)

_FILTER_FIELDS = {f.name for f in fields(FilterState)}


@dataclass(frozen=True)
class TrackerSnapshot:
    """Everything the rendering side needs for one frame."""

    filters: FilterState
    groups: tuple[GroupView, ...]
    estimate: RouteEstimate | None
    progress: Progress


Observer = Callable[[TrackerSnapshot], None]


class Tracker:
    """
    Session context around a catalogue.

    Args:
        catalogue: The catalogue; the tracker mutates caught flags in place
        filters: Initial filters (defaults to none)
        hide_caught: Initial "hide fully-caught" preference
    """

    def __init__(
        self,
        catalogue: list[Pokemon],
        filters: FilterState | None = None,
        hide_caught: bool = False,
    ):
        self.catalogue = catalogue
        self.filters = filters if filters is not None else FilterState()
        self.hide_caught = hide_caught
        self._by_id = {pokemon.id: pokemon for pokemon in catalogue}
        self._observers: list[Observer] = []
        self._area_index: AreaIndex | None = None

    # --- Observers ---

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer; it is called with a snapshot after every change.

        Returns:
            A function that unsubscribes the observer.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        if not self._observers:
            return
        snapshot = self.snapshot()
        for observer in list(self._observers):
            observer(snapshot)

    # --- State changes ---

    def set_filter(self, **changes: object) -> None:
        """
        Replace filter fields, e.g. set_filter(location="Route 1", time=None).

        Raises:
            TypeError: If an unknown filter field is given
        """
        unknown = set(changes) - _FILTER_FIELDS
        if unknown:
            raise TypeError(f"Unknown filter fields: {sorted(unknown)}")

        for name, value in changes.items():
            setattr(self.filters, name, value)
        self._notify()

    def set_hide_caught(self, hide_caught: bool) -> None:
        """Change the "hide fully-caught" preference."""
        self.hide_caught = hide_caught
        self._notify()

    def get_pokemon(self, pokemon_id: int) -> Pokemon:
        """
        Look up a Pokémon by id.

        Raises:
            KeyError: If the id is not in the catalogue
        """
        return self._by_id[pokemon_id]

    def toggle_caught(self, pokemon_id: int, variant_type: VariantType) -> bool:
        """
        Flip one variant's caught flag.

        Returns:
            The new caught flag.

        Raises:
            KeyError: If the Pokémon or the variant does not exist
        """
        pokemon = self.get_pokemon(pokemon_id)
        variant = pokemon.get_variant(variant_type)
        if variant is None:
            raise KeyError(f"{pokemon.name} has no {variant_type.value} variant")

        variant.caught = not variant.caught
        self._refresh_areas(pokemon)

        logger.info(
            "caught_toggled",
            extra={
                "pokemon_id": pokemon_id,
                "variant": variant_type.value,
                "caught": variant.caught,
            },
        )

        self._notify()
        return variant.caught

    def _refresh_areas(self, pokemon: Pokemon) -> None:
        """Recompute the indexed areas where this Pokémon appears."""
        if self._area_index is None:
            return
        for area in {Area(r.place, r.type, r.time) for r in pokemon.locations}:
            update_area(self._area_index, self.catalogue, area)

    def apply_import(self, text: str) -> int:
        """
        Merge an exported save into the catalogue.

        Raises:
            ImportValidationError: If the save is malformed (state unchanged)
        """
        applied = import_save(self.catalogue, text)
        self._area_index = None
        self._notify()
        return applied

    def export(self, compress: bool = True) -> str:
        """Encode the caught state for transport."""
        return encode_save(self.catalogue, compress=compress)

    # --- Derived views ---

    def estimate(self) -> RouteEstimate | None:
        """Route estimate for the current filters, if they define an area with Pokémon."""
        if not self.filters.has_area():
            return None
        candidates = build_candidates(self.catalogue, self.filters)
        if not candidates:
            return None
        return compute_route_probability(candidates, self.filters)

    def progress(self) -> Progress:
        return catalogue_progress(self.catalogue)

    def locations(self) -> list[str]:
        return list_locations(self.catalogue)

    def area_index(self) -> AreaIndex:
        """Area index, built on first use and rebuilt after an import."""
        if self._area_index is None:
            self._area_index = build_area_index(self.catalogue)
        return self._area_index

    def recommend(self) -> Area | None:
        """Best area for the current time filter."""
        return recommend_route(self.area_index(), self.filters)

    def snapshot(self) -> TrackerSnapshot:
        """Immutable view of the current projection, estimate and progress."""
        candidates = build_candidates(self.catalogue, self.filters)
        groups = group_by_variant(candidates, self.filters, self.hide_caught)

        return TrackerSnapshot(
            filters=replace(self.filters),
            groups=tuple(freeze_group(group) for group in groups),
            estimate=self.estimate(),
            progress=self.progress(),
        )
