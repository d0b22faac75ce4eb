from dataclasses import dataclass

from dextracker.models.pokemon import LocationType, TimeOfDay, VariantType


@dataclass
class FilterState:
    """
    Currently selected filters.

    None means "unconstrained". Owned and mutated by the caller;
    engine functions only read it.
    """

    location: str | None = None
    time: TimeOfDay | None = None
    type: LocationType | None = None
    variant: VariantType | None = None

    def is_empty(self) -> bool:
        """True if no filter is active."""
        return (
            not self.location and self.time is None and self.type is None and self.variant is None
        )

    def has_area(self) -> bool:
        """True if location, time and type are all set."""
        return bool(self.location) and self.time is not None and self.type is not None
