#!/usr/bin/env python3
"""
MoneyWell CLI - Read-only reporting over MoneyWell documents.

Usage:
    moneywell --file Budget.moneywell list recurrence-rules
    moneywell --file Budget.moneywell list recurrence-rules --unique
    moneywell --file Budget.moneywell describe --rule 12 --fill
    moneywell --file Budget.moneywell report --output rules.xlsx
"""

import argparse
import logging
import os
import sys
from contextlib import closing
from pathlib import Path
from typing import Optional

from moneywell.core.database import open_document
from moneywell.core.exceptions import MoneyWellError
from moneywell.recurrence.describe import describe_fill_recurrence_rule, describe_recurrence_rule
from moneywell.recurrence.repository import get_recurrence_rules, get_recurrence_rules_map
from moneywell.reports.recurrence_rule_report import RecurrenceRuleReport

logger = logging.getLogger(__name__)

DOCUMENT_ENV_VAR = "MONEYWELL_DOCUMENT"
LOG_LEVEL_ENV_VAR = "MONEYWELL_LOG_LEVEL"

LIST_ENTITIES = ["recurrence-rules"]


def get_document_path(file_arg: Optional[str]) -> Optional[Path]:
    """Get the document path from --file or the environment."""
    if file_arg:
        return Path(file_arg)
    if DOCUMENT_ENV_VAR in os.environ:
        return Path(os.environ[DOCUMENT_ENV_VAR])
    return None


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    override = os.environ.get(LOG_LEVEL_ENV_VAR)
    if override:
        level = logging.getLevelName(override.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


# ============================================================================
# Command Handlers
# ============================================================================

def cmd_list(args, conn) -> int:
    """Handle list command - print entities one per line."""
    report = RecurrenceRuleReport(conn).generate(unique=args.unique)

    for line in report.lines:
        primary_keys = ""
        if args.verbose:
            primary_keys = " [{}]".format(", ".join(str(pk) for pk in line.primary_keys))
        print(f"{line.description}{primary_keys}")

    return 0


def cmd_describe(args, conn) -> int:
    """Handle describe command - describe a single rule."""
    rules = get_recurrence_rules_map(conn)

    rule = rules.get(args.rule)
    if rule is None:
        print(f"Error: recurrence rule {args.rule} not found", file=sys.stderr)
        return 1

    if args.fill:
        print(describe_fill_recurrence_rule(rule))
    else:
        print(describe_recurrence_rule(rule))

    return 0


def cmd_report(args, conn) -> int:
    """Handle report command - export rules to Excel."""
    generator = RecurrenceRuleReport(conn)
    report = generator.generate_from_rules(get_recurrence_rules(conn), unique=not args.all)

    output_path = generator.export_excel(report, Path(args.output))
    print(f"Wrote {report.distinct_rules} rules to {output_path}")

    return 0


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog='moneywell',
        description='MoneyWell - read-only document reports',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  moneywell --file Budget.moneywell list recurrence-rules --unique
  moneywell --file Budget.moneywell describe --rule 12
  moneywell --file Budget.moneywell report --output rules.xlsx

The document path may also be given in ${DOCUMENT_ENV_VAR}.
        """
    )

    # Global arguments
    parser.add_argument('--file', help='Path to the MoneyWell document')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    parser.add_argument('--debug', action='store_true', help='Debug output')

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Command')

    # list command
    list_parser = subparsers.add_parser('list', help='List the given entity')
    list_parser.add_argument('entity', choices=LIST_ENTITIES, help='Entity to list')
    list_parser.add_argument('--unique', action='store_true',
                             help='Fold equal rules into one line')

    # describe command
    describe_parser = subparsers.add_parser('describe', help='Describe one recurrence rule')
    describe_parser.add_argument('--rule', '-r', type=int, required=True,
                                 help='Recurrence rule primary key')
    describe_parser.add_argument('--fill', action='store_true',
                                 help='Describe as a fill rule')

    # report command
    report_parser = subparsers.add_parser('report', help='Export recurrence rules to Excel')
    report_parser.add_argument('--output', '-o', required=True, help='Output .xlsx path')
    report_parser.add_argument('--all', action='store_true',
                               help='One line per rule instead of per distinct rule')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose, args.debug)

    document_path = get_document_path(args.file)
    if document_path is None:
        print("Error: path to MoneyWell document required (--file or "
              f"${DOCUMENT_ENV_VAR})", file=sys.stderr)
        return 1

    try:
        with closing(open_document(document_path)) as conn:
            if args.command == 'list':
                return cmd_list(args, conn)
            elif args.command == 'describe':
                return cmd_describe(args, conn)
            elif args.command == 'report':
                return cmd_report(args, conn)
            else:
                parser.print_help()
                return 1
    except MoneyWellError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
