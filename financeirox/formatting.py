# financeirox/formatting.py
#
# Display helpers shared by the report endpoints and the label services:
# deterministic JPY formatting, lenient date parsing, and default label colors.

import math
import re
from datetime import date

_DMY_RE = re.compile(r"^(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})$")
_ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_HUES = [210, 160, 120, 90, 45, 280, 330]


def format_jpy(value, with_sign: bool = False) -> str:
    """
    Format a yen amount as '¥12,345' (no decimals, ',' thousands separator).

    Negative values get a leading '-'; with_sign=True also prefixes '+'.
    Non-numeric input formats as ¥0.
    """
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        number = 0.0
    if not math.isfinite(number):
        number = 0.0

    negative = number < 0
    # Half-up on the magnitude
    core = f"¥{math.floor(abs(number) + 0.5):,}"

    if with_sign:
        return f"{'-' if negative else '+'}{core}"
    return f"-{core}" if negative else core


def parse_flexible_date(text: str | None) -> date | None:
    """
    Accept 'YYYY-MM-DD', 'dd/mm/yyyy' or 'dd-mm-yyyy'.
    Returns None for anything else, including impossible dates (31/02/2026).
    """
    if not text:
        return None
    t = text.strip()

    try:
        if _ISO_RE.match(t):
            return date.fromisoformat(t)

        m = _DMY_RE.match(t)
        if m:
            return date(int(m.group(3)), int(m.group(2)), int(m.group(1)))
    except ValueError:
        return None

    return None


def pick_color(seed: int) -> str:
    return f"hsl({_HUES[seed % len(_HUES)]} 80% 60%)"
