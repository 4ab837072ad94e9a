"""Calendar helpers shared by the rankings and the display labels."""

from __future__ import annotations

from datetime import date, datetime, timedelta

DAYS_IN_WEEK = 7
SUNDAY = 0

_MONTH_NAMES = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def day_of_week(day: date) -> int:
    """Return the weekday with Sunday = 0 ... Saturday = 6."""
    return (day.weekday() + 1) % 7


def week_start(reference: date) -> date:
    """Return the Monday of the week containing ``reference``.

    Sunday belongs to the week that started six days earlier, so weeks run
    Monday through Sunday.
    """
    weekday = day_of_week(reference)
    days_to_subtract = 6 if weekday == SUNDAY else weekday - 1
    return _as_date(reference) - timedelta(days=days_to_subtract)


def week_days(reference: date) -> list[date]:
    """Return the seven dates (Monday first) of the week containing ``reference``."""
    start = week_start(reference)
    return [start + timedelta(days=i) for i in range(DAYS_IN_WEEK)]


def parse_day(text: str) -> date | None:
    """Parse a ``YYYY-MM-DD`` key. Returns None for anything else."""
    if not isinstance(text, str):
        return None
    try:
        # Pin the instant to mid-day so the calendar day never drifts.
        return datetime.strptime(f"{text}T12:00:00", "%Y-%m-%dT%H:%M:%S").date()
    except ValueError:
        return None


def display_day(day: date) -> str:
    return day.strftime("%d/%m")


def week_range_label(reference) -> str:
    """Return ``"DD/MM - DD/MM"`` for the Monday-Sunday week of ``reference``.

    Anything that is not a date yields an empty string.
    """
    if not isinstance(reference, date):
        return ""
    monday = week_start(reference)
    sunday = monday + timedelta(days=DAYS_IN_WEEK - 1)
    return f"{display_day(monday)} - {display_day(sunday)}"


def month_label(reference) -> str:
    """Return the month and year of ``reference``, e.g. ``"outubro de 2026"``."""
    if not isinstance(reference, date):
        return ""
    return f"{_MONTH_NAMES[reference.month - 1]} de {reference.year}"


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
