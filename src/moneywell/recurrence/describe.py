"""
Human-readable descriptions of recurrence rules.

The wording follows MoneyWell's own schedule summaries, e.g.
"Every month on the 1st and 16th" or "Every week, ending on 2018-06-02",
so reports line up with what users see in the application. Descriptions
never fail: values outside the known tables render as "Unknown".
"""

from typing import List, Sequence

from moneywell.recurrence.rule import DayOfTheWeek, RecurrenceRule, RecurrenceType, WeekNumber

UNKNOWN = "Unknown"

DAY_OF_THE_WEEK_NAMES = {
    DayOfTheWeek.SUNDAY: "Sunday",
    DayOfTheWeek.MONDAY: "Monday",
    DayOfTheWeek.TUESDAY: "Tuesday",
    DayOfTheWeek.WEDNESDAY: "Wednesday",
    DayOfTheWeek.THURSDAY: "Thursday",
    DayOfTheWeek.FRIDAY: "Friday",
    DayOfTheWeek.SATURDAY: "Saturday",
}

MONTH_NAMES = {
    1: "January",
    2: "February",
    3: "March",
    4: "April",
    5: "May",
    6: "June",
    7: "July",
    8: "August",
    9: "September",
    10: "October",
    11: "November",
    12: "December",
}

PSEUDO_DAY_NAMES = {
    DayOfTheWeek.DAY: "day",
    DayOfTheWeek.WEEKDAY: "week day",
    DayOfTheWeek.WEEKEND_DAY: "weekend day",
}

ORDINAL_WEEK_NUMBERS = (
    WeekNumber.FIRST,
    WeekNumber.SECOND,
    WeekNumber.THIRD,
    WeekNumber.FOURTH,
)

EVERY_EVENT_DATE = "Every Event Date"


def describe_day_of_the_week(day_of_the_week: int) -> str:
    return DAY_OF_THE_WEEK_NAMES.get(day_of_the_week, UNKNOWN)


def describe_month(month: int) -> str:
    return MONTH_NAMES.get(month, UNKNOWN)


def describe_nth(day: int) -> str:
    """
    Ordinal form of a number: 1st, 2nd, 3rd, 4th, 11th, 21st, 31st.

    The last digit picks the suffix, except that 11, 12 and 13 all
    take "th" (11th, 12th, 13th rather than 11st, 12nd, 13rd).
    """
    if abs(day) % 100 in (11, 12, 13):
        return f"{day}th"

    last_digit = abs(day) % 10
    if last_digit == 1:
        return f"{day}st"
    if last_digit == 2:
        return f"{day}nd"
    if last_digit == 3:
        return f"{day}rd"
    return f"{day}th"


def join_words(words: Sequence[str]) -> str:
    """Join as "A", "A and B", "A, B and C" (no serial comma)."""
    if not words:
        return ""
    if len(words) == 1:
        return words[0]
    return f"{', '.join(words[:-1])} and {words[-1]}"


def _describe_every(interval: int, unit: str) -> str:
    if interval == 1:
        return f"Every {unit}"
    return f"Every {interval} {unit}s"


def _describe_on_the_day(day_of_the_week: int) -> List[str]:
    if day_of_the_week in PSEUDO_DAY_NAMES:
        return [PSEUDO_DAY_NAMES[day_of_the_week]]
    if day_of_the_week in DAY_OF_THE_WEEK_NAMES:
        return [DAY_OF_THE_WEEK_NAMES[day_of_the_week]]
    return []


def _describe_daily(rule: RecurrenceRule) -> str:
    if rule.recurrence_interval == 0:
        return "Never"
    return _describe_every(rule.recurrence_interval, "day")


def _describe_weekly(rule: RecurrenceRule) -> str:
    s = _describe_every(rule.recurrence_interval, "week")

    if rule.days_of_the_week:
        days = [describe_day_of_the_week(day) for day in rule.days_of_the_week]
        s = f"{s} on {join_words(days)}"

    return s


def _describe_monthly(rule: RecurrenceRule) -> str:
    parts = [_describe_every(rule.recurrence_interval, "month")]

    week_number = rule.on_the.week_number
    if week_number in ORDINAL_WEEK_NUMBERS:
        parts.append(f"on the {describe_nth(week_number)}")
    elif week_number == WeekNumber.LAST:
        parts.append("on the last")

    parts.extend(_describe_on_the_day(rule.on_the.day_of_the_week))

    if rule.on_the.day_of_the_week == DayOfTheWeek.NONE and rule.days_of_the_month:
        days = [describe_nth(day) for day in rule.days_of_the_month]
        parts.append(f"on the {join_words(days)}")

    return " ".join(parts)


def _describe_yearly(rule: RecurrenceRule) -> str:
    parts = [_describe_every(rule.recurrence_interval, "year")]

    week_number = rule.on_the.week_number
    if week_number in ORDINAL_WEEK_NUMBERS:
        parts.append(f"on the {describe_nth(week_number)}")
    elif week_number == WeekNumber.LAST:
        parts.append("on the last")

    parts.extend(_describe_on_the_day(rule.on_the.day_of_the_week))

    if rule.months_of_the_year:
        # "in March" on its own, "of March" after a weekday clause
        if rule.on_the.day_of_the_week == DayOfTheWeek.NONE:
            parts.append("in")
        else:
            parts.append("of")

        months = [describe_month(month) for month in rule.months_of_the_year]
        parts.append(join_words(months))

    return " ".join(parts)


_DESCRIBERS = {
    RecurrenceType.DAILY: _describe_daily,
    RecurrenceType.WEEKLY: _describe_weekly,
    RecurrenceType.MONTHLY: _describe_monthly,
    RecurrenceType.YEARLY: _describe_yearly,
}


def describe_end(rule: RecurrenceRule) -> str:
    """End-condition suffix; occurrence count wins over end date."""
    if rule.occurrence_count > 0:
        plural = "s" if rule.occurrence_count > 1 else ""
        return f", ending after {rule.occurrence_count} time{plural}"
    if rule.end_date is not None:
        return f", ending on {rule.end_date.strftime('%Y-%m-%d')}"
    return ""


def describe_recurrence_rule(rule: RecurrenceRule) -> str:
    """
    Describe how often a rule repeats.

    Args:
        rule: Recurrence rule to describe

    Returns:
        Sentence such as "Every 2 weeks on Tuesday and Thursday, ending after 4 times"
    """
    describer = _DESCRIBERS.get(rule.recurrence_type)
    s = describer(rule) if describer is not None else UNKNOWN
    return s + describe_end(rule)


def describe_fill_recurrence_rule(rule: RecurrenceRule) -> str:
    """
    Describe a fill rule: when the next occurrence of a plan item is generated.

    A daily fill rule with interval 0 follows the event's own dates.
    """
    if rule.recurrence_type == RecurrenceType.DAILY and rule.recurrence_interval == 0:
        return EVERY_EVENT_DATE

    return describe_recurrence_rule(rule)
