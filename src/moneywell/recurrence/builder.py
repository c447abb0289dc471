"""Assemble RecurrenceRule values from ZRECURRENCERULE columns."""

import logging
from typing import NamedTuple, Optional, Union

from moneywell.core.dateymd import parse_dateymd
from moneywell.core.exceptions import ArchiveDecodeError, DateParseError, FieldBuildError
from moneywell.recurrence.archive import decode_archive
from moneywell.recurrence.extractors import extract_integers, extract_weekday_selector
from moneywell.recurrence.rule import RecurrenceRule

logger = logging.getLogger(__name__)

Blob = Optional[Union[bytes, str]]


class RecurrenceRuleRow(NamedTuple):
    """Column order of the recurrence rule query."""
    primary_key: int
    end_date_ymd: Optional[int]
    first_day_of_the_week: Optional[int]
    occurrence_count: Optional[int]
    recurrence_interval: Optional[int]
    recurrence_type: Optional[int]
    days_of_the_month: Blob
    days_of_the_week: Blob
    months_of_the_year: Blob
    weekdays_of_the_month: Blob


def _decode_integers(field_name: str, blob: Blob):
    try:
        return extract_integers(decode_archive(blob))
    except ArchiveDecodeError as e:
        raise FieldBuildError(field_name, e) from e


def build_recurrence_rule(
    primary_key: int,
    recurrence_type: Optional[int],
    recurrence_interval: Optional[int],
    first_day_of_the_week: Optional[int] = 0,
    occurrence_count: Optional[int] = 0,
    end_date_ymd: Optional[int] = 0,
    days_of_the_month: Blob = None,
    days_of_the_week: Blob = None,
    months_of_the_year: Blob = None,
    weekdays_of_the_month: Blob = None,
) -> RecurrenceRule:
    """
    Build one recurrence rule from its scalar columns and archive blobs.

    NULL scalars read as 0 and NULL blobs leave that axis unconstrained.

    Raises:
        FieldBuildError: If the end date or any blob fails to decode; the
            underlying error is chained as __cause__
    """
    try:
        end_date = parse_dateymd(end_date_ymd)
    except DateParseError as e:
        raise FieldBuildError("end_date", e) from e

    decoded_days_of_the_month = _decode_integers("days_of_the_month", days_of_the_month)
    decoded_days_of_the_week = _decode_integers("days_of_the_week", days_of_the_week)
    decoded_months_of_the_year = _decode_integers("months_of_the_year", months_of_the_year)

    try:
        on_the = extract_weekday_selector(decode_archive(weekdays_of_the_month))
    except ArchiveDecodeError as e:
        raise FieldBuildError("weekdays_of_the_month", e) from e

    return RecurrenceRule(
        primary_key=primary_key,
        recurrence_type=recurrence_type or 0,
        recurrence_interval=recurrence_interval or 0,
        end_date=end_date,
        occurrence_count=occurrence_count or 0,
        first_day_of_the_week=first_day_of_the_week or 0,
        days_of_the_month=decoded_days_of_the_month,
        days_of_the_week=decoded_days_of_the_week,
        months_of_the_year=decoded_months_of_the_year,
        on_the=on_the,
    )


def build_from_row(row) -> RecurrenceRule:
    """Build a rule from a query row in RecurrenceRuleRow column order."""
    fields = RecurrenceRuleRow(*tuple(row))
    try:
        return build_recurrence_rule(
            primary_key=fields.primary_key,
            recurrence_type=fields.recurrence_type,
            recurrence_interval=fields.recurrence_interval,
            first_day_of_the_week=fields.first_day_of_the_week,
            occurrence_count=fields.occurrence_count,
            end_date_ymd=fields.end_date_ymd,
            days_of_the_month=fields.days_of_the_month,
            days_of_the_week=fields.days_of_the_week,
            months_of_the_year=fields.months_of_the_year,
            weekdays_of_the_month=fields.weekdays_of_the_month,
        )
    except FieldBuildError as e:
        logger.error(f"Recurrence rule {fields.primary_key}: {e.message}")
        raise FieldBuildError(e.field, e.cause, primary_key=fields.primary_key) from e.cause
