"""
Save import/export.

The save format is the caught state of every Pokémon with at least one
caught variant, as minified JSON:

    [{"id":1,"variants":[{"type":"Normal","caught":true}]}]

For copy/paste transport the JSON may be zlib-compressed and base64-encoded.
Decoding accepts both forms.

Import merges by id + variant type: variants missing from the payload keep
their flag. A malformed payload is rejected before anything is changed.
"""

import base64
import binascii
import json
import logging
import zlib
from typing import Any

from pydantic import BaseModel, StrictBool, TypeAdapter, ValidationError

from dextracker.models.failure import ImportValidationError
from dextracker.models.pokemon import Pokemon, VariantType

logger = logging.getLogger(__name__)


class SaveVariant(BaseModel):
    """Caught flag for one variant."""

    type: VariantType
    caught: StrictBool


class SaveEntry(BaseModel):
    """Caught state for one Pokémon."""

    id: int
    variants: list[SaveVariant]


_save_adapter = TypeAdapter(list[SaveEntry])


def export_caught_state(catalogue: list[Pokemon]) -> list[dict[str, Any]]:
    """Caught state of every Pokémon that has at least one caught variant."""
    return [
        {
            "id": pokemon.id,
            "variants": [
                {"type": variant.type.value, "caught": variant.caught}
                for variant in pokemon.variants
            ],
        }
        for pokemon in catalogue
        if pokemon.caught_count() > 0
    ]


def encode_save(catalogue: list[Pokemon], compress: bool = True) -> str:
    """
    Encode the caught state for transport.

    Args:
        catalogue: Catalogue to export
        compress: zlib-compress and base64-frame the JSON

    Returns:
        Minified JSON, or its compressed base64 frame.
    """
    payload = json.dumps(export_caught_state(catalogue), separators=(",", ":"))
    if not compress:
        return payload
    return base64.b64encode(zlib.compress(payload.encode("utf-8"))).decode("ascii")


def decode_save(text: str) -> Any:
    """
    Decode a save blob into raw JSON data.

    Raises:
        ImportValidationError: If the text is neither JSON nor a valid frame
    """
    text = text.strip()
    if not text:
        raise ImportValidationError("Invalid save data: the import is empty")

    if text.startswith(("[", "{")):
        raw = text
    else:
        try:
            raw = zlib.decompress(base64.b64decode(text, validate=True)).decode("utf-8")
        except (binascii.Error, zlib.error, UnicodeDecodeError) as e:
            raise ImportValidationError(
                "Invalid save data: could not decode the import", detail=str(e)
            ) from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ImportValidationError(
            "Invalid save data: the import is not valid JSON", detail=str(e)
        ) from e


def parse_save_payload(data: Any) -> list[SaveEntry]:
    """
    Validate decoded save data.

    Every entry needs an id and a variants list; every variant needs a
    known type and a boolean caught flag.

    Raises:
        ImportValidationError: If any entry is malformed
    """
    try:
        return _save_adapter.validate_python(data)
    except ValidationError as e:
        raise ImportValidationError(
            "Invalid save data: every entry needs an 'id' and 'variants'",
            detail=str(e),
        ) from e


def merge_caught_state(catalogue: list[Pokemon], entries: list[SaveEntry]) -> int:
    """
    Apply imported caught flags to the catalogue.

    Unknown ids and variant types the Pokémon does not have are skipped.

    Returns:
        Number of variant flags applied.
    """
    by_id = {pokemon.id: pokemon for pokemon in catalogue}
    applied = 0
    skipped = 0

    for entry in entries:
        pokemon = by_id.get(entry.id)
        if pokemon is None:
            skipped += 1
            continue
        for saved in entry.variants:
            variant = pokemon.get_variant(saved.type)
            if variant is None:
                skipped += 1
                continue
            variant.caught = saved.caught
            applied += 1

    logger.info("save_imported", extra={"applied": applied, "skipped": skipped})
    return applied


def import_save(catalogue: list[Pokemon], text: str) -> int:
    """
    Decode, validate and merge a save blob.

    Validation completes before the catalogue is touched, so a rejected
    import leaves it unchanged.

    Raises:
        ImportValidationError: If the blob is malformed
    """
    entries = parse_save_payload(decode_save(text))
    return merge_caught_state(catalogue, entries)
