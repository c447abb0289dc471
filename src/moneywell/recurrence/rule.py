"""
Recurrence rule data model.

The MoneyWell SQLite schema for the ZRECURRENCERULE table is as follows:

    CREATE TABLE ZRECURRENCERULE (
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

from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Optional, Tuple


class RecurrenceType(IntEnum):
    """Recurrence cadence stored in ZRECURRENCETYPE."""
    DAILY = 0
    WEEKLY = 1
    MONTHLY = 2
    YEARLY = 3


class WeekNumber(IntEnum):
    """Which occurrence of a weekday within the month."""
    NONE = 0
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    LAST = -1


class DayOfTheWeek(IntEnum):
    """Weekdays are 1-7 from Sunday; negative values are pseudo-days."""
    NONE = 0
    SUNDAY = 1
    MONDAY = 2
    TUESDAY = 3
    WEDNESDAY = 4
    THURSDAY = 5
    FRIDAY = 6
    SATURDAY = 7
    DAY = -1
    WEEKDAY = -2
    WEEKEND_DAY = -3


def _as_tuple(values) -> Tuple[int, ...]:
    if values is None:
        return ()
    return tuple(values)


@dataclass(frozen=True)
class OnThe:
    """The "on the Nth weekday" selector of monthly and yearly rules."""

    day_of_the_week: int = DayOfTheWeek.NONE
    week_number: int = WeekNumber.NONE

    @property
    def is_set(self) -> bool:
        return self.day_of_the_week != DayOfTheWeek.NONE or self.week_number != WeekNumber.NONE


@dataclass(frozen=True)
class RecurrenceRule:
    """
    Conditions under which a spending plan event or its fill event repeat.

    The primary key identifies the source row only; it takes no part in
    equality, hashing or ordering.
    """

    primary_key: int = field(default=0, compare=False)
    recurrence_type: int = RecurrenceType.DAILY
    recurrence_interval: int = 0
    end_date: Optional[date] = None
    occurrence_count: int = 0
    first_day_of_the_week: int = 0
    days_of_the_month: Tuple[int, ...] = ()
    days_of_the_week: Tuple[int, ...] = ()
    months_of_the_year: Tuple[int, ...] = ()
    on_the: OnThe = field(default_factory=OnThe)
    weekdays_of_the_month: Tuple[int, ...] = ()

    def __post_init__(self):
        """Normalise sequence fields to tuples so rules stay immutable."""
        for name in ("days_of_the_month", "days_of_the_week",
                     "months_of_the_year", "weekdays_of_the_month"):
            object.__setattr__(self, name, _as_tuple(getattr(self, name)))
        if self.on_the is None:
            object.__setattr__(self, "on_the", OnThe())

    @property
    def has_end_date(self) -> bool:
        return self.end_date is not None
