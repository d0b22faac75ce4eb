from dextracker.models.failure import (
    CatalogueLoadError,
    FailureDetail,
    FailureKind,
    ImportValidationError,
    InvariantViolation,
    KnownError,
)
from dextracker.models.filters import FilterState
from dextracker.models.pokemon import (
    RARITY_ORDER,
    VARIANT_DISPLAY_ORDER,
    LocationRecord,
    LocationType,
    Pokemon,
    Rarity,
    TimeOfDay,
    Variant,
    VariantType,
)
from dextracker.models.projection import (
    Area,
    AreaIndex,
    CellView,
    EvolutionLine,
    GroupView,
    Progress,
    RouteEstimate,
    VariantGroup,
    freeze_group,
)

__all__ = [
    "Area",
    "AreaIndex",
    "CatalogueLoadError",
    "CellView",
    "EvolutionLine",
    "FailureDetail",
    "FailureKind",
    "FilterState",
    "GroupView",
    "ImportValidationError",
    "InvariantViolation",
    "KnownError",
    "LocationRecord",
    "LocationType",
    "Pokemon",
    "Progress",
    "RARITY_ORDER",
    "Rarity",
    "RouteEstimate",
    "TimeOfDay",
    "VARIANT_DISPLAY_ORDER",
    "Variant",
    "VariantGroup",
    "VariantType",
    "freeze_group",
]
