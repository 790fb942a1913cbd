from inventory_api.database.base import Base
from inventory_api.database.engine import build_engine, init_db
from inventory_api.database.session import build_session_factory, get_db

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "get_db",
    "init_db",
]
