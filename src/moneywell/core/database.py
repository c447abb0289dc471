"""
Read-only access to the SQLite store inside a MoneyWell document.

A `.moneywell` document is a bundle directory; the Core Data store lives at
StoreContent/persistentStore. A bare store file is also accepted.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Union

from moneywell.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)

PERSISTENT_STORE = Path("StoreContent") / "persistentStore"


def resolve_store_path(document_path: Union[str, Path]) -> Path:
    """
    Resolve a document path to the SQLite file holding its data.

    Raises:
        DatabaseError: If the path does not exist
    """
    path = Path(document_path)
    if not path.exists():
        raise DatabaseError(f"Failed to stat {path}: no such file or directory")

    if path.is_dir():
        return path / PERSISTENT_STORE
    return path


def open_document(document_path: Union[str, Path]) -> sqlite3.Connection:
    """
    Open a MoneyWell document for reading.

    Args:
        document_path: `.moneywell` bundle directory or store file

    Returns:
        Read-only connection with sqlite3.Row rows

    Raises:
        DatabaseError: If the document cannot be opened
    """
    store_path = resolve_store_path(document_path)
    logger.debug(f"Opening MoneyWell store at {store_path}")

    try:
        connection = sqlite3.connect(f"{store_path.resolve().as_uri()}?mode=ro", uri=True)
    except sqlite3.Error as e:
        raise DatabaseError(f"Failed to open database: {e}") from e

    connection.row_factory = sqlite3.Row
    return connection

