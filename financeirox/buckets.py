# financeirox/buckets.py
"""
Calendar bucketing for the period bar charts.

A window is always 4 contiguous buckets ending at the period that contains
the reference date. Each bucket is a half-open [start, end) range of dates
aligned to its granularity:

    day    -> one calendar day
    week   -> Monday .. Sunday
    month  -> calendar month
    year   -> calendar year
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Mapping, Optional

from financeirox import config

MODES = ("day", "week", "month", "year")
BUCKET_COUNT = 4

# Indexed by date.weekday() (0 = Monday)
PT_WEEKDAYS = ["seg", "ter", "qua", "qui", "sex", "sáb", "dom"]
PT_MONTHS_SHORT = [
    "jan", "fev", "mar", "abr", "mai", "jun",
    "jul", "ago", "set", "out", "nov", "dez",
]


@dataclass(frozen=True)
class Bucket:
    start: date  # inclusive
    end: date  # exclusive
    label: str
    key: str

    def contains(self, d: date) -> bool:
        return self.start <= d < self.end

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "label": self.label,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }


@dataclass(frozen=True)
class BucketTotal:
    bucket: Bucket
    value: float

    def to_dict(self) -> dict:
        d = self.bucket.to_dict()
        d["value"] = self.value
        return d


def _check_mode(mode: str) -> str:
    if mode not in MODES:
        raise ValueError(f"Unknown granularity: {mode!r}")
    return mode


def _as_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


# ---- Period arithmetic ----

def period_start(mode: str, d: date) -> date:
    """First day of the period (of the given granularity) containing d."""
    _check_mode(mode)
    if mode == "day":
        return d
    if mode == "week":
        return d - timedelta(days=d.weekday())
    if mode == "month":
        return d.replace(day=1)
    return date(d.year, 1, 1)


def shift(mode: str, d: date, n: int) -> date:
    """
    Move d by n periods.

    Month and year moves land on the first day of the target period,
    day and week moves keep the weekday.
    """
    _check_mode(mode)
    if mode == "day":
        return d + timedelta(days=n)
    if mode == "week":
        return d + timedelta(weeks=n)
    if mode == "month":
        month_index = d.year * 12 + (d.month - 1) + n
        return date(month_index // 12, month_index % 12 + 1, 1)
    return date(d.year + n, 1, 1)


def _label(mode: str, start: date) -> str:
    if mode == "day":
        return PT_WEEKDAYS[start.weekday()]
    if mode == "week":
        return f"{start.day}/{start.month:02d}"
    if mode == "month":
        return f"{PT_MONTHS_SHORT[start.month - 1]}/{start.year % 100:02d}"
    return str(start.year)


def _key(mode: str, start: date) -> str:
    if mode == "month":
        return f"m-{start.year:04d}-{start.month:02d}"
    if mode == "year":
        return f"y-{start.year:04d}"
    return f"{mode[0]}-{start.isoformat()}"


def period_label(mode: str, ref: date) -> str:
    """Human label for the navigation header ("semana de 3/2", "out 2026"...)."""
    _check_mode(mode)
    if mode == "day":
        return PT_WEEKDAYS[ref.weekday()]
    if mode == "week":
        return f"semana de {ref.day}/{ref.month}"
    if mode == "month":
        return f"{PT_MONTHS_SHORT[ref.month - 1]} {ref.year}"
    return str(ref.year)


# ---- Buckets ----

def buckets_for(mode: str, ref: date) -> List[Bucket]:
    """
    Return 4 ascending buckets, the last one containing ref.
    """
    last_start = period_start(mode, ref)
    buckets: List[Bucket] = []
    for i in range(BUCKET_COUNT - 1, -1, -1):
        start = shift(mode, last_start, -i)
        end = shift(mode, start, 1)
        buckets.append(Bucket(start=start, end=end, label=_label(mode, start), key=_key(mode, start)))
    return buckets


def window(buckets: List[Bucket]) -> tuple[date, date]:
    """Overall [start, end) covered by a list of contiguous buckets."""
    return buckets[0].start, buckets[-1].end


# ---- Navigation ----

def prev_ref(mode: str, current: date) -> date:
    return shift(mode, current, -1)


def next_clamped(mode: str, current: date, today: Optional[date] = None) -> date:
    """
    Advance one period unless that would move past the period containing
    today; in that case return current unchanged.
    """
    today = today or config.today()
    candidate = shift(mode, current, 1)
    if period_start(mode, candidate) > period_start(mode, today):
        return current
    return candidate


# ---- Aggregation ----

def _tx_field(tx: Any, api_name: str, attr: str) -> Any:
    if isinstance(tx, Mapping):
        return tx.get(api_name)
    return getattr(tx, attr, None)


def bucket_totals(
    buckets: List[Bucket],
    transactions: Iterable[Any],
    tx_type: str,
) -> List[BucketTotal]:
    """
    Sum amounts of `tx_type` transactions falling in each bucket.
    Rows with an unparseable date or amount are skipped.
    """
    values = [0.0] * len(buckets)

    for tx in transactions:
        if _tx_field(tx, "type", "type") != tx_type:
            continue
        occurred = _as_date(_tx_field(tx, "occurredAt", "occurred_at"))
        if occurred is None:
            continue
        try:
            amount = float(_tx_field(tx, "amount", "amount") or 0)
        except (TypeError, ValueError):
            continue
        for i, b in enumerate(buckets):
            if b.contains(occurred):
                values[i] += amount
                break

    return [BucketTotal(bucket=b, value=v) for b, v in zip(buckets, values)]
