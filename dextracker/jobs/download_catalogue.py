"""
Download the Pokémon catalogue.

Fetches the configured catalogue URL, validates it, and writes it to the
configured catalogue path.
"""

import asyncio
import json
import logging
from pathlib import Path

from dextracker.config import settings
from dextracker.parsers.catalogue_json import catalogue_to_list
from dextracker.services.catalogue import catalogue_file_path, fetch_catalogue

logger = logging.getLogger(__name__)


async def run_download(url: str | None = None, output_path: Path | None = None) -> Path:
    """Download, validate and save the catalogue."""
    url = url or settings.catalogue_url
    if not url:
        raise ValueError("No catalogue URL configured (set CATALOGUE_URL)")

    output_path = output_path or catalogue_file_path()
    logger.info("Downloading catalogue from %s...", url)

    catalogue = await fetch_catalogue(url)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(catalogue_to_list(catalogue), f, ensure_ascii=False, indent=2)

    logger.info("Saved %d Pokémon to %s", len(catalogue), output_path)
    return output_path


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download())


if __name__ == "__main__":
    main()
