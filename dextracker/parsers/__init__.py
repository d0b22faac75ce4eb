from dextracker.parsers.catalogue_json import (
    catalogue_to_list,
    parse_catalogue,
    pokemon_to_dict,
    validate_catalogue,
)
from dextracker.parsers.save_transfer import (
    decode_save,
    encode_save,
    export_caught_state,
    import_save,
    merge_caught_state,
    parse_save_payload,
)

__all__ = [
    "catalogue_to_list",
    "decode_save",
    "encode_save",
    "export_caught_state",
    "import_save",
    "merge_caught_state",
    "parse_catalogue",
    "parse_save_payload",
    "pokemon_to_dict",
    "validate_catalogue",
]
