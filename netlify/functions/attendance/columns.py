from typing import List, Optional, Sequence

NAME_ALIASES = ["full name", "name", "student name", "student"]
TIME_ALIASES = ["time in call", "time", "duration", "call time", "call duration"]


def _cell_str(val) -> str:
    if val is None: return ""
    if isinstance(val, float) and val != val: return ""
    return str(val)

def find_header_row(rows: Sequence[Sequence]) -> int:
    """First row whose first cell is filled and is not a ``*`` comment line.

    Meeting providers prepend title/comment rows starting with ``*``; those and
    blank rows are skipped. Falls back to 0.
    """
    for i, row in enumerate(rows):
        first = _cell_str(row[0]).strip() if row else ""
        if first and not first.startswith("*"):
            return i
    return 0

def find_column(headers: Sequence, aliases: List[str]) -> Optional[int]:
    lower = [_cell_str(h).lower().strip() for h in (headers or [])]
    for alias in aliases:
        alias = alias.lower()
        if alias in lower:
            return lower.index(alias)
    return None


class MissingColumnsError(ValueError):
    """Raised when a required header cannot be located in an uploaded table."""
