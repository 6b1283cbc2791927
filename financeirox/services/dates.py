# financeirox/services/dates.py
#
# Date Range Helpers
# Parsing of query-string dates and month ranges used by the transaction
# filters and the report endpoints.

from datetime import date

from financeirox import config
from financeirox.formatting import parse_flexible_date


def parse_optional_date(s: str | None) -> date | None:
    """
    Parse an optional query value. Blank -> None.
    Raises ValueError for non-blank text that is not a date.
    """
    if not s:
        return None
    s = s.strip()
    if not s:
        return None
    parsed = parse_flexible_date(s)
    if parsed is None:
        raise ValueError(f"invalid date: {s!r}")
    return parsed


def _month_bounds(year: int, month: int):
    # date() rejects months outside 1..12 and years outside 1..9999
    start_date = date(year, month, 1)
    if month == 12:
        end_date_exclusive = date(year + 1, 1, 1)
    else:
        end_date_exclusive = date(year, month + 1, 1)
    return start_date, end_date_exclusive, f"{year:04d}-{month:02d}"


def get_month_range(month_str: str | None, today: date | None = None):
    """
    month_str: 'YYYY-MM' or None.
    Returns (start_date, end_date_exclusive, normalized_month_str).
    If month_str is None or invalid, uses the CURRENT month.
    """
    today = today or config.today()

    if month_str:
        try:
            year_str, month_only_str = month_str.split("-")
            return _month_bounds(int(year_str), int(month_only_str))
        except (ValueError, OverflowError):
            pass

    return _month_bounds(today.year, today.month)


def year_to_date_range(year: int | None = None, today: date | None = None):
    """
    (Jan 1, last day inclusive) for the tax summary.
    The current year stops at today; past years run to Dec 31.
    """
    today = today or config.today()
    year = year or today.year
    start = date(year, 1, 1)
    end = today if year == today.year else date(year, 12, 31)
    return start, end
