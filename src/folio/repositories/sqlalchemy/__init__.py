"""SQLAlchemy repository implementations."""

from folio.repositories.sqlalchemy.database import (
    create_db_engine,
    get_engine,
    get_session_factory,
    get_session,
    init_db,
    reset_database,
    Base,
)
from folio.repositories.sqlalchemy.asset_repo import SqlAlchemyAssetRepository

__all__ = [
    "create_db_engine",
    "get_engine",
    "get_session_factory",
    "get_session",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyAssetRepository",
]
