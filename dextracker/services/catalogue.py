"""
Catalogue source.

Fetches the static catalogue file over HTTP or reads it from disk.
Failures surface as CatalogueLoadError; no retry is attempted.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

import httpx

from dextracker.config import settings
from dextracker.models.failure import CatalogueLoadError
from dextracker.models.pokemon import Pokemon
from dextracker.parsers.catalogue_json import catalogue_to_list, parse_catalogue

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent.parent / "data"


async def fetch_catalogue(url: str, client: httpx.AsyncClient | None = None) -> list[Pokemon]:
    """
    Fetch and parse the catalogue from a URL.

    Args:
        url: Location of the catalogue JSON file
        client: Optional httpx client for connection reuse

    Raises:
        CatalogueLoadError: On network, HTTP status or parse errors
    """
    try:
        if client is not None:
            response = await client.get(url)
        else:
            async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as own_client:
                response = await own_client.get(url)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        logger.error("Failed to fetch catalogue from %s: %s", url, e)
        raise CatalogueLoadError("Failed to load Pokémon data.", detail=str(e)) from e
    except json.JSONDecodeError as e:
        raise CatalogueLoadError("Catalogue is not valid JSON.", detail=str(e)) from e

    catalogue = parse_catalogue(data)
    logger.info("Fetched catalogue with %d Pokémon from %s", len(catalogue), url)
    return catalogue


def load_catalogue_file(path: Path | None = None) -> list[Pokemon]:
    """
    Load and parse the catalogue from disk.

    Args:
        path: Path to the JSON file. Defaults to data/pokemon_list.json

    Raises:
        CatalogueLoadError: If the file is missing or malformed
    """
    if path is None:
        path = DATA_DIR / "pokemon_list.json"

    if not path.exists():
        raise CatalogueLoadError(
            f"Catalogue not found at {path}.",
            detail="Run `python -m dextracker.jobs.download_catalogue` first.",
        )

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogueLoadError(f"Catalogue at {path} is not valid JSON.", detail=str(e)) from e

    return parse_catalogue(data)


def catalogue_file_path() -> Path:
    """Configured catalogue path; a relative path is taken from the project root."""
    path = Path(settings.catalogue_path)
    if not path.is_absolute():
        path = DATA_DIR.parent / path
    return path


@lru_cache(maxsize=1)
def _cached_catalogue_document() -> str:
    """Raw catalogue document, cached after first read."""
    catalogue = load_catalogue_file(catalogue_file_path())
    return json.dumps(catalogue_to_list(catalogue))


def get_default_catalogue() -> list[Pokemon]:
    """
    Fresh copy of the configured catalogue file.

    The file is read once; every call returns new Pokémon objects so caught
    flags never leak between trackers.
    """
    return parse_catalogue(json.loads(_cached_catalogue_document()))


async def acquire_catalogue() -> list[Pokemon]:
    """Catalogue from the configured URL, or from the configured file if no URL is set."""
    if settings.catalogue_url:
        return await fetch_catalogue(settings.catalogue_url)
    return get_default_catalogue()
