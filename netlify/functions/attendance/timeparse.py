import math
import re

_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")


def _int_prefix(s: str) -> int:
    m = _INT_PREFIX_RE.match(s)
    return int(m.group(1)) if m else 0

def parse_time_to_minutes(value) -> float:
    """Minutes in call from a duration cell.

    Accepts a plain number of minutes, ``H:M:S`` or ``M:S``. Each clock segment
    is read up to its first non-digit; anything unreadable counts as 0.
    """
    if value is None or isinstance(value, bool): return 0.0
    if isinstance(value, (int, float)):
        return 0.0 if math.isnan(value) else float(value)
    s = str(value).strip()
    if not s: return 0.0
    if _NUMBER_RE.match(s):
        return float(s)
    parts = s.split(":")
    if len(parts) == 3:
        h, m, sec = (_int_prefix(p) for p in parts)
        return h * 60 + m + sec / 60.0
    if len(parts) == 2:
        m, sec = (_int_prefix(p) for p in parts)
        return m + sec / 60.0
    return 0.0
