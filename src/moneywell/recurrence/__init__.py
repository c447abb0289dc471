"""
Recurrence rule engine.

Provides:
- decode_archive: Keyed archive (NSKeyedArchiver plist) decoding
- extract_integers / extract_weekday_selector: Field extraction from archives
- build_recurrence_rule: RecurrenceRule assembly from stored columns
- compare_recurrence_rules / unique_recurrence_rules: Canonical ordering
- describe_recurrence_rule / describe_fill_recurrence_rule: Display phrases
- get_recurrence_rules / get_recurrence_rules_map: Store queries
"""

from moneywell.recurrence.rule import (
    RecurrenceRule,
    RecurrenceType,
    OnThe,
    WeekNumber,
    DayOfTheWeek,
)
from moneywell.recurrence.archive import (
    ArchiveValue,
    ArchiveInteger,
    ArchiveReal,
    ArchiveBoolean,
    ArchiveString,
    ArchiveData,
    ArchiveDate,
    ArchiveArray,
    ArchiveMap,
    ArchiveReference,
    decode_archive,
)
from moneywell.recurrence.extractors import (
    SELECTOR_CLASS_UID,
    extract_integers,
    extract_weekday_selector,
)
from moneywell.recurrence.builder import (
    RecurrenceRuleRow,
    build_recurrence_rule,
    build_from_row,
)
from moneywell.recurrence.ordering import (
    compare_sequences,
    compare_recurrence_rules,
    recurrence_rule_sort_key,
    sort_recurrence_rules,
    unique_recurrence_rules,
)
from moneywell.recurrence.describe import (
    describe_day_of_the_week,
    describe_month,
    describe_nth,
    join_words,
    describe_recurrence_rule,
    describe_fill_recurrence_rule,
)
from moneywell.recurrence.repository import (
    RECURRENCE_RULE_SCHEMA_SQL,
    get_recurrence_rules,
    get_recurrence_rules_map,
)

__all__ = [
    # Model
    "RecurrenceRule",
    "RecurrenceType",
    "OnThe",
    "WeekNumber",
    "DayOfTheWeek",
    # Archive
    "ArchiveValue",
    "ArchiveInteger",
    "ArchiveReal",
    "ArchiveBoolean",
    "ArchiveString",
    "ArchiveData",
    "ArchiveDate",
    "ArchiveArray",
    "ArchiveMap",
    "ArchiveReference",
    "decode_archive",
    # Extraction
    "SELECTOR_CLASS_UID",
    "extract_integers",
    "extract_weekday_selector",
    # Building
    "RecurrenceRuleRow",
    "build_recurrence_rule",
    "build_from_row",
    # Ordering
    "compare_sequences",
    "compare_recurrence_rules",
    "recurrence_rule_sort_key",
    "sort_recurrence_rules",
    "unique_recurrence_rules",
    # Descriptions
    "describe_day_of_the_week",
    "describe_month",
    "describe_nth",
    "join_words",
    "describe_recurrence_rule",
    "describe_fill_recurrence_rule",
    # Queries
    "RECURRENCE_RULE_SCHEMA_SQL",
    "get_recurrence_rules",
    "get_recurrence_rules_map",
]
