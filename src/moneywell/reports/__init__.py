"""Reports module for generating MoneyWell reports.

Provides report generators:
- Recurrence Rule Report (Excel)
"""

from .recurrence_rule_report import (
    RecurrenceRuleReport,
    RecurrenceRuleReportData,
    RecurrenceRuleLine,
)

__all__ = [
    "RecurrenceRuleReport",
    "RecurrenceRuleReportData",
    "RecurrenceRuleLine",
]
