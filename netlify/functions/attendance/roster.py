import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .columns import NAME_ALIASES, MissingColumnsError, find_column, find_header_row
from .names import clean_student_name, normalize_for_matching

logger = logging.getLogger(__name__)

NOTETAKER_MARKER = "AI Notetaker"


class Roster:
    """Ordered list of canonical student names.

    Entries are only ever appended; duplicates (same display form) are ignored.
    Removal happens through :meth:`remove` and :meth:`clear` only.
    """

    def __init__(self, names: Optional[Iterable[str]] = None):
        self._names: List[str] = []
        for n in names or []:
            if isinstance(n, str) and n and n not in self._names:
                self._names.append(n)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def sorted(self) -> List[str]:
        return sorted(self._names)

    def add(self, name) -> bool:
        clean = clean_student_name(name)
        if not clean or clean in self._names:
            return False
        self._names.append(clean)
        logger.debug("roster: added %s", clean)
        return True

    def add_many(self, names: Iterable) -> int:
        return sum(1 for n in names if self.add(n))

    def remove(self, name: str) -> bool:
        if name not in self._names:
            return False
        self._names = [n for n in self._names if n != name]
        return True

    def clear(self) -> None:
        self._names = []

    def matching_index(self) -> Dict[str, str]:
        """Matching form -> first roster entry carrying it."""
        index: Dict[str, str] = {}
        for n in self._names:
            index.setdefault(normalize_for_matching(n), n)
        return index

    def import_rows(self, rows: Sequence[Sequence]) -> Tuple[int, int]:
        """Add every name from a decoded roster table.

        Returns ``(names_read, names_added)``.
        """
        if not rows:
            raise MissingColumnsError('Could not find a "Name", "Student Name", or "Full Name" column in the file.')
        header_idx = find_header_row(rows)
        name_col = find_column(rows[header_idx], NAME_ALIASES)
        if name_col is None:
            raise MissingColumnsError('Could not find a "Name", "Student Name", or "Full Name" column in the file.')
        found = []
        for row in rows[header_idx + 1:]:
            val = row[name_col] if name_col < len(row) else None
            if val is None or not str(val).strip() or NOTETAKER_MARKER in str(val):
                continue
            found.append(val)
        added = self.add_many(found)
        logger.info("roster import: %d names read, %d new (total %d)", len(found), added, len(self))
        return len(found), added
