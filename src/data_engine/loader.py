"""
Data Loader - reads the three source tables from a SQLite database.
Returns: LoadedTables (features, links, targets)
"""

import logging
import sqlite3
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Union

import pandas as pd

from ..config import FEATURE_TABLE, LINK_TABLE, TARGET_TABLE
from ..validation.validator import (
    FEATURE_COLUMNS,
    LINK_COLUMNS,
    TARGET_COLUMNS,
    validate_tables,
)
from .errors import DatabaseConnectionError, SchemaError

logger = logging.getLogger(__name__)

Storage = Union[str, Path, sqlite3.Connection]


@dataclass(frozen=True)
class LoadedTables:
    """The three source tables, as read from storage."""
    features: pd.DataFrame
    links: pd.DataFrame
    targets: pd.DataFrame


def _connect_read_only(path: Union[str, Path]) -> sqlite3.Connection:
    """Open a SQLite file read-only; never creates a missing file."""
    db_path = Path(path)
    if not db_path.is_file():
        raise DatabaseConnectionError(f"Database file not found: {db_path}")
    uri = f"{db_path.resolve().as_uri()}?mode=ro"
    try:
        return sqlite3.connect(uri, uri=True)
    except sqlite3.Error as e:
        raise DatabaseConnectionError(f"Could not open database {db_path}: {e}") from e


def _list_tables(conn: sqlite3.Connection) -> set:
    try:
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type IN ('table', 'view')"
        ).fetchall()
    except sqlite3.Error as e:
        raise DatabaseConnectionError(f"Could not read database catalog: {e}") from e
    return {row[0] for row in rows}


def _read_tables(conn: sqlite3.Connection, table_names: Iterable[str]) -> Dict[str, pd.DataFrame]:
    names = list(table_names)
    available = _list_tables(conn)
    absent = [name for name in names if name not in available]
    if absent:
        raise SchemaError(f"Missing table(s) in database: {', '.join(absent)}")

    frames = {}
    for name in names:
        quoted = '"' + name.replace('"', '""') + '"'
        try:
            frames[name] = pd.read_sql_query(f"SELECT * FROM {quoted}", conn)
        except (sqlite3.Error, pd.errors.DatabaseError) as e:
            raise DatabaseConnectionError(f"Failed reading table '{name}': {e}") from e
        logger.info("Loaded table %s: %d rows, %d columns", name, *frames[name].shape)
    return frames


def load_tables(
    storage: Storage,
    feature_table: str = FEATURE_TABLE,
    link_table: str = LINK_TABLE,
    target_table: str = TARGET_TABLE,
) -> LoadedTables:
    """
    Read the feature, link and target tables.

    Args:
        storage: Path to a SQLite file, or an open sqlite3.Connection
            (a connection passed in is left open for the caller)
        feature_table: Table with id, age, sex, bmi, children, smoker, region
        link_table: Table with id1, id2
        target_table: Table with id, charges

    Returns:
        LoadedTables

    Raises:
        DatabaseConnectionError: storage cannot be opened or read
        SchemaError: a table or an expected column is absent
    """
    names = (feature_table, link_table, target_table)
    if isinstance(storage, sqlite3.Connection):
        frames = _read_tables(storage, names)
    else:
        with closing(_connect_read_only(storage)) as conn:
            frames = _read_tables(conn, names)

    validation = validate_tables(
        frames,
        schema={
            feature_table: FEATURE_COLUMNS,
            link_table: LINK_COLUMNS,
            target_table: TARGET_COLUMNS,
        },
    )
    for warning in validation.warnings:
        logger.warning(warning)
    if not validation.is_valid:
        raise SchemaError(" ".join(validation.errors))

    return LoadedTables(
        features=frames[feature_table],
        links=frames[link_table],
        targets=frames[target_table],
    )
