"""
Shared pytest fixtures for MoneyWell tests.

Provides keyed archive blobs, an in-memory recurrence rule store, and the
sample rules of a small budget document.
"""

import plistlib
import sqlite3
import struct
import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from moneywell.core.dateymd import format_dateymd
from moneywell.recurrence.repository import RECURRENCE_RULE_SCHEMA_SQL
from moneywell.recurrence.rule import DayOfTheWeek, RecurrenceType


DAILY = RecurrenceType.DAILY
WEEKLY = RecurrenceType.WEEKLY
MONTHLY = RecurrenceType.MONTHLY
YEARLY = RecurrenceType.YEARLY


def archive_integers(values) -> bytes:
    """Binary keyed archive of an NSArray of NSNumbers, as MoneyWell writes it."""
    values = list(values)
    objects = [
        "$null",
        {
            "NS.objects": [plistlib.UID(3 + i) for i in range(len(values))],
            "$class": plistlib.UID(2),
        },
        {"$classname": "NSArray", "$classes": ["NSArray", "NSObject"]},
    ]
    objects.extend(int(value) for value in values)

    return plistlib.dumps(
        {
            "$version": 100000,
            "$archiver": "NSKeyedArchiver",
            "$top": {"root": plistlib.UID(1)},
            "$objects": objects,
        },
        fmt=plistlib.FMT_BINARY,
    )


def archive_selector(day_of_the_week: int, week_number: int) -> bytes:
    """Binary keyed archive of a single day-of-week/week-number selector."""
    return plistlib.dumps(
        {
            "$version": 100000,
            "$archiver": "NSKeyedArchiver",
            "$top": {"root": plistlib.UID(1)},
            "$objects": [
                "$null",
                {
                    "dayOfTheWeek": int(day_of_the_week),
                    "weekNumber": int(week_number),
                    "$class": plistlib.UID(2),
                },
                {"$classname": "MWNthWeekday", "$classes": ["MWNthWeekday", "NSObject"]},
            ],
        },
        fmt=plistlib.FMT_BINARY,
    )


def archive_self_containing() -> bytes:
    """Binary plist whose $objects array holds a reference to itself."""
    objects = [
        b"\xd1\x01\x02",         # 0: {obj1: obj2}
        b"\x58$objects",         # 1: "$objects"
        b"\xa1\x02",             # 2: [obj2]
    ]

    body = b"bplist00"
    offsets = []
    for obj in objects:
        offsets.append(len(body))
        body += obj

    offset_table_offset = len(body)
    body += bytes(offsets)
    trailer = struct.pack(">6xBBQQQ", 1, 1, len(objects), 0, offset_table_offset)
    return body + trailer


# (pk, type, interval, days of month, days of week, months, on the, occurrences, end date)
SAMPLE_RULES = [
    (1, MONTHLY, 1, None, None, None, None, 0, None),
    (2, DAILY, 1, None, None, None, None, 0, None),
    (3, MONTHLY, 1, [1, 16], None, None, None, 0, None),
    (4, WEEKLY, 3, None, None, None, None, 0, None),
    (5, WEEKLY, 4, None, None, None, None, 0, None),
    (6, MONTHLY, 3, None, None, None, None, 0, None),
    (7, MONTHLY, 2, None, None, None, None, 0, None),
    (8, MONTHLY, 6, None, None, None, None, 0, None),
    (9, WEEKLY, 2, None, None, None, None, 0, None),
    (10, YEARLY, 1, None, None, None, None, 0, None),
    (11, MONTHLY, 1, [1, 15], None, None, None, 0, None),
    (12, MONTHLY, 1, [15, 31], None, None, None, 0, None),
    (13, YEARLY, 2, None, None, None, None, 0, None),
    (14, WEEKLY, 1, None, None, None, None, 0, None),
    (15, DAILY, 1, None, None, None, None, 0, None),
    (16, WEEKLY, 1, None, None, None, None, 0, None),
    (17, MONTHLY, 3, None, None, None, None, 0, None),
    (18, MONTHLY, 1, [1, 15], None, None, None, 0, None),
    (19, MONTHLY, 1, [15, 31], None, None, None, 0, None),
    (20, WEEKLY, 2, None, None, None, None, 0, None),
    (21, MONTHLY, 1, [1, 16], None, None, None, 0, None),
    (22, WEEKLY, 4, None, None, None, None, 0, None),
    (23, MONTHLY, 2, None, None, None, None, 0, None),
    (24, MONTHLY, 1, None, None, None, None, 0, None),
    (25, WEEKLY, 3, None, None, None, None, 0, None),
    (26, MONTHLY, 6, None, None, None, None, 0, None),
    (27, YEARLY, 2, None, None, None, None, 0, None),
    (28, YEARLY, 1, None, None, None, None, 0, None),
    (29, MONTHLY, 6, None, None, None, None, 0, None),
    (30, WEEKLY, 4, None, None, None, None, 0, None),
    (31, MONTHLY, 1, [1, 15], None, None, None, 0, None),
    (32, WEEKLY, 2, None, None, None, None, 0, None),
    (33, WEEKLY, 1, None, None, None, None, 0, None),
    (34, MONTHLY, 2, None, None, None, None, 0, None),
    (35, MONTHLY, 1, [1, 16], None, None, None, 0, None),
    (36, YEARLY, 1, None, None, None, None, 0, None),
    (37, MONTHLY, 1, None, None, None, None, 0, None),
    (38, MONTHLY, 3, None, None, None, None, 0, None),
    (39, MONTHLY, 1, [15, 31], None, None, None, 0, None),
    (40, WEEKLY, 3, None, None, None, None, 0, None),
    (41, DAILY, 1, None, None, None, None, 0, None),
    (42, DAILY, 1, None, None, None, None, 11, None),
    (43, WEEKLY, 1, None, None, None, None, 0, date(2018, 6, 2)),
    (44, WEEKLY, 1, None, [1, 2, 4, 6], None, None, 0, None),
    (45, WEEKLY, 1, None, [1, 2, 4, 6], None, None, 0, None),
    (46, WEEKLY, 1, None, [3, 5, 7], None, None, 0, None),
    (47, WEEKLY, 1, None, [3, 5, 7], None, None, 0, None),
    (48, MONTHLY, 1, [10], None, None, (DayOfTheWeek.DAY, 2), 0, None),
    (49, MONTHLY, 1, [10], None, None, (DayOfTheWeek.WEEKDAY, 3), 0, None),
    (50, MONTHLY, 1, [10], None, None, (DayOfTheWeek.WEEKDAY, 3), 0, None),
    (51, MONTHLY, 1, [10], None, None, (DayOfTheWeek.DAY, 2), 0, None),
    (52, DAILY, 2, None, None, None, None, 0, None),
    (53, DAILY, 2, None, None, None, None, 0, None),
    (54, MONTHLY, 1, [10], None, None, (DayOfTheWeek.WEEKEND_DAY, 1), 0, None),
    (55, MONTHLY, 1, [10], None, None, (DayOfTheWeek.WEEKEND_DAY, 1), 0, None),
]


def insert_rule(
    conn,
    primary_key,
    recurrence_type,
    recurrence_interval,
    days_of_the_month=None,
    days_of_the_week=None,
    months_of_the_year=None,
    on_the=None,
    occurrence_count=0,
    end_date=None,
    first_day_of_the_week=0,
):
    """Insert one ZRECURRENCERULE row, archiving the array columns."""
    conn.execute(
        """
        INSERT INTO ZRECURRENCERULE (
            Z_PK, ZENDDATEYMD, ZFIRSTDAYOFTHEWEEK, ZOCCURRENCECOUNT,
            ZRECURRENCEINTERVAL, ZRECURRENCETYPE, ZDAYSOFTHEMONTH,
            ZDAYSOFTHEWEEK, ZMONTHSOFTHEYEAR, ZNTHWEEKDAYSOFTHEMONTH
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            primary_key,
            format_dateymd(end_date),
            first_day_of_the_week,
            occurrence_count,
            recurrence_interval,
            int(recurrence_type),
            archive_integers(days_of_the_month) if days_of_the_month is not None else None,
            archive_integers(days_of_the_week) if days_of_the_week is not None else None,
            archive_integers(months_of_the_year) if months_of_the_year is not None else None,
            archive_selector(*on_the) if on_the is not None else None,
        ),
    )


@pytest.fixture
def db_connection():
    """Provide an in-memory store with an empty ZRECURRENCERULE table."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.executescript(RECURRENCE_RULE_SCHEMA_SQL)
    yield conn
    conn.close()


@pytest.fixture
def db_with_rules(db_connection):
    """Provide a store populated with the sample budget's recurrence rules."""
    for row in SAMPLE_RULES:
        insert_rule(db_connection, *row)
    db_connection.commit()
    yield db_connection


@pytest.fixture
def document_path(tmp_path):
    """Create a `.moneywell` bundle on disk holding the sample rules."""
    bundle = tmp_path / "Test.moneywell"
    store = bundle / "StoreContent" / "persistentStore"
    store.parent.mkdir(parents=True)

    conn = sqlite3.connect(str(store))
    conn.executescript(RECURRENCE_RULE_SCHEMA_SQL)
    for row in SAMPLE_RULES:
        insert_rule(conn, *row)
    conn.commit()
    conn.close()

    return bundle


@pytest.fixture
def integer_archive():
    """Builder for NSArray-of-NSNumber archive blobs."""
    return archive_integers


@pytest.fixture
def selector_archive():
    """Builder for day-of-week/week-number selector archive blobs."""
    return archive_selector


@pytest.fixture
def add_rule(db_connection):
    """Insert a custom recurrence rule row into the in-memory store."""
    def _add_rule(*args, **kwargs):
        insert_rule(db_connection, *args, **kwargs)
        db_connection.commit()
    return _add_rule


@pytest.fixture
def sorted_unique_descriptions():
    """Descriptions of the sample rules after sorting and de-duplication."""
    return [
        "Every day",
        "Every day, ending after 11 times",
        "Every 2 days",
        "Every week",
        "Every week, ending on 2018-06-02",
        "Every week on Sunday, Monday, Wednesday and Friday",
        "Every week on Tuesday, Thursday and Saturday",
        "Every 2 weeks",
        "Every 3 weeks",
        "Every 4 weeks",
        "Every month",
        "Every month on the 1st and 15th",
        "Every month on the 1st and 16th",
        "Every month on the 1st weekend day",
        "Every month on the 3rd week day",
        "Every month on the 2nd day",
        "Every month on the 15th and 31st",
        "Every 2 months",
        "Every 3 months",
        "Every 6 months",
        "Every year",
        "Every 2 years",
    ]


@pytest.fixture
def self_containing_archive():
    """Keyed archive blob with a cyclic $objects array."""
    return archive_self_containing()
