from dextracker.db.database import get_session, init_db
from dextracker.db.operations import (
    delete_snapshot,
    get_snapshot,
    load_snapshot,
    save_snapshot,
)

__all__ = [
    "delete_snapshot",
    "get_session",
    "get_snapshot",
    "init_db",
    "load_snapshot",
    "save_snapshot",
]
