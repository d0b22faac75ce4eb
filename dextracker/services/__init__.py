from dextracker.services.catalogue import (
    acquire_catalogue,
    catalogue_file_path,
    fetch_catalogue,
    get_default_catalogue,
    load_catalogue_file,
)
from dextracker.services.tracker import Tracker, TrackerSnapshot

__all__ = [
    "Tracker",
    "TrackerSnapshot",
    "acquire_catalogue",
    "catalogue_file_path",
    "fetch_catalogue",
    "get_default_catalogue",
    "load_catalogue_file",
]
