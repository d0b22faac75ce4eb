from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "DexTracker"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./dextracker.db"

    # Static catalogue file, fetched once when no snapshot exists
    catalogue_url: str = ""
    catalogue_path: str = "data/pokemon_list.json"

    # Key of the single persisted catalogue snapshot
    snapshot_key: str = "pokedex"

    # Default for the "hide fully-caught groups" display preference
    hide_caught: bool = False


settings = Settings()


# =============================================================================
# ENGINE LIMITS
# =============================================================================

# Every evolution row is padded to this many slots so tables align
EVOLUTION_LINE_WIDTH = 6

# Slot 0 holds the base form, leaving room for this many evolutions
MAX_EVOLUTIONS_PER_LINE = EVOLUTION_LINE_WIDTH - 1

# Completion totals count every variant type per Pokémon, obtainable or not
VARIANT_SLOTS_PER_POKEMON = 6
