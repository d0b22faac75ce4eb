"""
Catalogue models.

A Pokémon owns its encounter locations and its variants. Variants carry
the only mutable state in the catalogue: the caught flag.

INVARIANTS:
- previous_forms forms a forward chain with no cycles
- At most one Variant per VariantType within a Pokémon
- A missing variant type means "not obtainable", never "uncaught"
"""

from dataclasses import dataclass, field
from enum import Enum


class Rarity(str, Enum):
    """Declared rarity of a Pokémon, in display order."""

    COMMON = "Common"
    RARE = "Rare"
    LEGENDARY = "Legendary"
    ULTRA_BEAST = "Ultra Beast"


class LocationType(str, Enum):
    """Encounter terrain."""

    LAND = "Land"
    WATER = "Water"


class TimeOfDay(str, Enum):
    """Encounter time."""

    DAY = "Day"
    NIGHT = "Night"


class VariantType(str, Enum):
    """Cosmetic variant, independently markable as caught."""

    NORMAL = "Normal"
    SHINY = "Shiny"
    DARK = "Dark"
    MYSTIC = "Mystic"
    METALLIC = "Metallic"
    SHADOW = "Shadow"


# Fixed orders used by the display projector
RARITY_ORDER: tuple[Rarity, ...] = (
    Rarity.COMMON,
    Rarity.RARE,
    Rarity.LEGENDARY,
    Rarity.ULTRA_BEAST,
)

VARIANT_DISPLAY_ORDER: tuple[VariantType, ...] = (
    VariantType.NORMAL,
    VariantType.DARK,
    VariantType.MYSTIC,
    VariantType.METALLIC,
    VariantType.SHADOW,
    VariantType.SHINY,
)


@dataclass(frozen=True, slots=True)
class LocationRecord:
    """One place/terrain/time combination where a Pokémon appears."""

    place: str
    type: LocationType
    time: TimeOfDay


@dataclass(slots=True)
class Variant:
    """A variant of a Pokémon and whether it has been caught."""

    type: VariantType
    caught: bool = False


@dataclass
class Pokemon:
    """
    A catalogue entry.

    Attributes:
        id: Stable unique identifier
        name: Display name
        rarity: Declared rarity
        previous_forms: Ids of earlier evolution stages (empty for base forms)
        locations: Where the Pokémon can be encountered
        variants: Obtainable variants with their caught flags
    """

    id: int
    name: str
    rarity: Rarity
    previous_forms: list[int] = field(default_factory=list)
    locations: list[LocationRecord] = field(default_factory=list)
    variants: list[Variant] = field(default_factory=list)

    @property
    def is_base_form(self) -> bool:
        """True if the Pokémon has no earlier evolution stage."""
        return not self.previous_forms

    def evolves_from(self, pokemon_id: int) -> bool:
        """Check if pokemon_id is one of this Pokémon's earlier stages."""
        return pokemon_id in self.previous_forms

    def get_variant(self, variant_type: VariantType) -> Variant | None:
        """Get the variant of the given type, or None if not obtainable."""
        for variant in self.variants:
            if variant.type == variant_type:
                return variant
        return None

    def has_variant(self, variant_type: VariantType) -> bool:
        """Check if the variant type is obtainable for this Pokémon."""
        return self.get_variant(variant_type) is not None

    def has_uncaught_variant(self) -> bool:
        """Check if any obtainable variant is still uncaught."""
        return any(not variant.caught for variant in self.variants)

    def caught_count(self) -> int:
        """Number of caught variants."""
        return sum(1 for variant in self.variants if variant.caught)
