"""
Recurrence rule queries against a MoneyWell store.

Rules are fetched from ZRECURRENCERULE in primary key order and decoded in
full; a row that fails to decode aborts the whole load.
"""

import logging
import sqlite3
from typing import Dict, List

from moneywell.core.exceptions import DatabaseError
from moneywell.recurrence.builder import build_from_row
from moneywell.recurrence.rule import RecurrenceRule

logger = logging.getLogger(__name__)

# Only the columns read by the reader; a real store has more
RECURRENCE_RULE_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS ZRECURRENCERULE (
    Z_PK INTEGER PRIMARY KEY,
    Z_ENT INTEGER,
    Z_OPT INTEGER,
    ZENDDATEYMD INTEGER,
    ZFIRSTDAYOFTHEWEEK INTEGER,
    ZOCCURRENCECOUNT INTEGER,
    ZRECURRENCEINTERVAL INTEGER,
    ZRECURRENCETYPE INTEGER,
    ZACTIVITY INTEGER,
    Z5_ACTIVITY INTEGER,
    ZEVENT INTEGER,
    ZTICDSSYNCID VARCHAR,
    ZUNIQUEID VARCHAR,
    ZDAYSOFTHEMONTH BLOB,
    ZDAYSOFTHEWEEK BLOB,
    ZMONTHSOFTHEYEAR BLOB,
    ZNTHWEEKDAYSOFTHEMONTH BLOB
);
"""

RECURRENCE_RULES_QUERY = """
    SELECT
        zr.Z_PK,
        zr.ZENDDATEYMD,
        zr.ZFIRSTDAYOFTHEWEEK,
        zr.ZOCCURRENCECOUNT,
        zr.ZRECURRENCEINTERVAL,
        zr.ZRECURRENCETYPE,
        zr.ZDAYSOFTHEMONTH,
        zr.ZDAYSOFTHEWEEK,
        zr.ZMONTHSOFTHEYEAR,
        zr.ZNTHWEEKDAYSOFTHEMONTH
    FROM
        ZRECURRENCERULE zr
    ORDER BY
        zr.Z_PK ASC
"""


def get_recurrence_rules(connection: sqlite3.Connection) -> List[RecurrenceRule]:
    """
    Fetch the recurrence rules in a MoneyWell document.

    Args:
        connection: Open connection to the document's store

    Returns:
        Rules in primary key order

    Raises:
        DatabaseError: If the query fails
        FieldBuildError: If any row fails to decode
    """
    try:
        rows = connection.execute(RECURRENCE_RULES_QUERY).fetchall()
    except sqlite3.Error as e:
        raise DatabaseError(f"Failed to query recurrence rules: {e}") from e

    recurrence_rules = [build_from_row(row) for row in rows]

    logger.info(f"Loaded {len(recurrence_rules)} recurrence rules")
    return recurrence_rules


def get_recurrence_rules_map(connection: sqlite3.Connection) -> Dict[int, RecurrenceRule]:
    """Get a map from the recurrence rule primary key to the recurrence rule."""
    return {rule.primary_key: rule for rule in get_recurrence_rules(connection)}
