"""Recurrence Rule Report Generator.

Lists the schedules used by a MoneyWell document in canonical order, one
line per distinct schedule, with both the repeat and the fill description.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional
import sqlite3

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from moneywell.recurrence.describe import (
    UNKNOWN,
    describe_fill_recurrence_rule,
    describe_recurrence_rule,
)
from moneywell.recurrence.ordering import sort_recurrence_rules
from moneywell.recurrence.repository import get_recurrence_rules
from moneywell.recurrence.rule import RecurrenceRule, RecurrenceType


@dataclass
class RecurrenceRuleLine:
    """One displayed schedule and every rule that shares it."""

    rule: RecurrenceRule
    description: str
    fill_description: str
    primary_keys: list[int] = field(default_factory=list)

    @property
    def type_name(self) -> str:
        try:
            return RecurrenceType(self.rule.recurrence_type).name.title()
        except ValueError:
            return UNKNOWN


@dataclass
class RecurrenceRuleReportData:
    """Recurrence rule report data."""

    lines: list[RecurrenceRuleLine] = field(default_factory=list)
    total_rules: int = 0

    @property
    def distinct_rules(self) -> int:
        return len(self.lines)


class RecurrenceRuleReport:
    """
    Generate a Recurrence Rule Report.

    Rules are sorted with the canonical ordering; with unique=True, rules
    equal to their predecessor are folded into its line.
    """

    def __init__(self, db_connection: Optional[sqlite3.Connection] = None):
        """
        Initialize report generator.

        Args:
            db_connection: Connection to the MoneyWell store
        """
        self.conn = db_connection

    def generate(self, unique: bool = True) -> RecurrenceRuleReportData:
        """
        Generate the report from the rules stored in the document.

        Args:
            unique: Fold equal rules into a single line

        Returns:
            RecurrenceRuleReportData with one line per displayed rule
        """
        return self.generate_from_rules(get_recurrence_rules(self.conn), unique=unique)

    def generate_from_rules(
        self,
        rules: Iterable[RecurrenceRule],
        unique: bool = True
    ) -> RecurrenceRuleReportData:
        """
        Generate the report from already loaded rules.

        Useful when the rules were fetched for other purposes and a second
        query is not wanted.
        """
        report = RecurrenceRuleReportData()

        for rule in sort_recurrence_rules(rules):
            report.total_rules += 1

            if unique and report.lines and report.lines[-1].rule == rule:
                report.lines[-1].primary_keys.append(rule.primary_key)
                continue

            report.lines.append(RecurrenceRuleLine(
                rule=rule,
                description=describe_recurrence_rule(rule),
                fill_description=describe_fill_recurrence_rule(rule),
                primary_keys=[rule.primary_key],
            ))

        return report

    def export_excel(self, report: RecurrenceRuleReportData, output_path: Path) -> Path:
        """
        Export recurrence rule report to Excel.

        Args:
            report: RecurrenceRuleReportData from generate()
            output_path: Output file path (.xlsx)

        Returns:
            Path to generated Excel file
        """
        wb = Workbook()
        ws = wb.active
        ws.title = "Recurrence Rules"

        # Styles
        header_font = Font(bold=True, size=14)
        subheader_font = Font(bold=True, size=11)
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        header_font_white = Font(bold=True, color="FFFFFF")
        border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )

        row = 1

        ws.cell(row=row, column=1, value="Recurrence Rules")
        ws.cell(row=row, column=1).font = header_font
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=5)
        row += 2

        ws.cell(row=row, column=1, value="Summary")
        ws.cell(row=row, column=1).font = subheader_font
        row += 1

        ws.cell(row=row, column=1, value="Total Rules:")
        ws.cell(row=row, column=2, value=report.total_rules)
        row += 1

        ws.cell(row=row, column=1, value="Distinct Rules:")
        ws.cell(row=row, column=2, value=report.distinct_rules)
        row += 2

        if report.lines:
            headers = ["Type", "Description", "Fill Description", "Rules", "Primary Keys"]
            for col, header in enumerate(headers, 1):
                cell = ws.cell(row=row, column=col, value=header)
                cell.font = header_font_white
                cell.fill = header_fill
                cell.border = border
                cell.alignment = Alignment(horizontal="center")
            row += 1

            for line in report.lines:
                data = [
                    line.type_name,
                    line.description,
                    line.fill_description,
                    len(line.primary_keys),
                    ", ".join(str(pk) for pk in line.primary_keys),
                ]
                for col, value in enumerate(data, 1):
                    cell = ws.cell(row=row, column=col, value=value)
                    cell.border = border
                row += 1
        else:
            ws.cell(row=row, column=1, value="No recurrence rules found.")

        ws.column_dimensions["A"].width = 12
        ws.column_dimensions["B"].width = 55
        ws.column_dimensions["C"].width = 55
        ws.column_dimensions["D"].width = 8
        ws.column_dimensions["E"].width = 20

        output_path = Path(output_path)
        wb.save(output_path)
        return output_path
