"""
Readers that pull recurrence fields out of decoded keyed archives.

An archived NSArray of NSNumbers flattens into `$objects` as the bookkeeping
entries (`$null`, the array object, its class description) followed by the
numbers themselves, so the integers can be collected by a plain scan. The
"on the Nth weekday" selector is archived as an object whose `$class` handle
points at a fixed slot.
"""

from typing import Optional, Tuple

from moneywell.recurrence.archive import ArchiveInteger, ArchiveMap
from moneywell.recurrence.rule import OnThe

# `$class` UID of the archived day-of-week/week-number selector object
SELECTOR_CLASS_UID = 2

DAY_OF_THE_WEEK_KEY = "dayOfTheWeek"
WEEK_NUMBER_KEY = "weekNumber"


def extract_integers(archive: Optional[ArchiveMap]) -> Tuple[int, ...]:
    """
    Collect every boxed unsigned integer in `$objects`, in archive order.

    Non-numeric entries are archive bookkeeping and are skipped.
    """
    if archive is None:
        return ()

    return tuple(
        item.value
        for item in archive.objects
        if isinstance(item, ArchiveInteger) and item.is_unsigned
    )


def _read_int(selector: ArchiveMap, key: str) -> int:
    value = selector.get(key)
    if isinstance(value, ArchiveInteger):
        return value.value
    return 0


def extract_weekday_selector(archive: Optional[ArchiveMap]) -> OnThe:
    """
    Find the day-of-week/week-number selector object in `$objects`.

    Returns:
        OnThe pair from the first matching object, or OnThe() (both zero)
        when the archive is absent or holds no selector
    """
    if archive is None:
        return OnThe()

    for item in archive.objects:
        if not isinstance(item, ArchiveMap):
            continue

        cls = item.class_reference
        if cls is None or cls.uid != SELECTOR_CLASS_UID:
            continue

        return OnThe(
            day_of_the_week=_read_int(item, DAY_OF_THE_WEEK_KEY),
            week_number=_read_int(item, WEEK_NUMBER_KEY),
        )

    return OnThe()
