"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from finboard.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV_VAR = "FINBOARD_DB_PATH"


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Resolve the SQLite file location.

    Precedence: explicit argument, then the FINBOARD_DB_PATH environment
    variable, then ~/.finboard/finboard.db (the directory is created).
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        db_dir = Path.home() / ".finboard"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "finboard.db")

    return database_path


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. See resolve_database_path
            for how a missing path is filled in.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    database_url = f"sqlite:///{resolve_database_path(database_path)}"
    return SQLAlchemyDatabase(database_url)
