"""
Canonical ordering of recurrence rules.

Rules sort by type, then interval, then a type-specific tiebreak, then
occurrence count and end date. Rules that tie on every key are duplicates
for display purposes, see unique_recurrence_rules().
"""

from datetime import date
from functools import cmp_to_key
from typing import Iterable, List, Optional, Sequence

from moneywell.recurrence.rule import RecurrenceRule, RecurrenceType


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_sequences(a: Sequence[int], b: Sequence[int]) -> int:
    """
    Compare two integer sequences position by position.

    A proper prefix sorts first; otherwise the first differing element
    decides. Returns 0 only when both are element-wise equal. Sequences are
    not sorted first: (2, 1) and (1, 2) compare unequal.
    """
    for k in range(max(len(a), len(b))):
        if k >= len(a):
            return -1
        if k >= len(b):
            return 1
        if a[k] != b[k]:
            return _cmp(a[k], b[k])

    return 0


def _end_date_key(end_date: Optional[date]) -> date:
    return end_date if end_date is not None else date.min


def compare_recurrence_rules(a: RecurrenceRule, b: RecurrenceRule) -> int:
    """Three-way comparison of two rules in canonical display order."""
    if a.recurrence_type != b.recurrence_type:
        return _cmp(a.recurrence_type, b.recurrence_type)
    if a.recurrence_interval != b.recurrence_interval:
        return _cmp(a.recurrence_interval, b.recurrence_interval)

    if a.recurrence_type == RecurrenceType.WEEKLY:
        result = compare_sequences(a.days_of_the_week, b.days_of_the_week)
        if result:
            return result

    elif a.recurrence_type == RecurrenceType.MONTHLY:
        result = compare_sequences(a.days_of_the_month, b.days_of_the_month)
        if result:
            return result
        if a.on_the.day_of_the_week != b.on_the.day_of_the_week:
            return _cmp(a.on_the.day_of_the_week, b.on_the.day_of_the_week)

    elif a.recurrence_type == RecurrenceType.YEARLY:
        result = compare_sequences(a.months_of_the_year, b.months_of_the_year)
        if result:
            return result

    if a.occurrence_count != b.occurrence_count:
        return _cmp(a.occurrence_count, b.occurrence_count)

    return _cmp(_end_date_key(a.end_date), _end_date_key(b.end_date))


recurrence_rule_sort_key = cmp_to_key(compare_recurrence_rules)


def sort_recurrence_rules(rules: Iterable[RecurrenceRule]) -> List[RecurrenceRule]:
    """Return the rules in canonical order; ties keep their input order."""
    return sorted(rules, key=recurrence_rule_sort_key)


def unique_recurrence_rules(rules: Iterable[RecurrenceRule]) -> List[RecurrenceRule]:
    """
    Sort the rules and drop each one equal to its predecessor.

    Equality here is structural equality (primary keys ignored), which is
    stricter than an ordering tie: two rules can tie on every sort key and
    still differ, e.g. in first_day_of_the_week.
    """
    unique = []
    for rule in sort_recurrence_rules(rules):
        if unique and rule == unique[-1]:
            continue
        unique.append(rule)
    return unique
