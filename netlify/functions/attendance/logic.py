import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .columns import NAME_ALIASES, TIME_ALIASES, MissingColumnsError, find_column, find_header_row
from .models import ABSENT, PRESENT, AlternativeStudent, AttendanceRecord, ReconcileResult, Settings
from .names import clean_student_name, normalize_for_matching
from .roster import Roster
from .timeparse import parse_time_to_minutes

logger = logging.getLogger(__name__)

EXCLUDE_NAME_MARKERS = [
    "AI Notetaker",
    "tldv.io",
]

# -------------------- row helpers --------------------

def _is_blank(val) -> bool:
    if val is None: return True
    if isinstance(val, float) and val != val: return True
    return isinstance(val, str) and not val.strip()

def _cell(row: Sequence, idx: int):
    return row[idx] if idx < len(row) else None

def _as_roster(roster) -> Roster:
    return roster if isinstance(roster, Roster) else Roster(roster)

# -------------------- main engine --------------------

def reconcile(rows: Iterable[Tuple[object, object]], roster, settings: Optional[Settings] = None,
              trainer_name: Optional[str] = None) -> Tuple[List[AttendanceRecord], List[AlternativeStudent]]:
    """Classify (raw name, raw time) pairs against the roster.

    Returns the attendance records in input order and the present attendees
    that could not be matched to anyone on the roster.
    """
    settings = settings or Settings()
    roster = _as_roster(roster)
    trainer_key = normalize_for_matching(trainer_name) if trainer_name else ""
    roster_index = roster.matching_index()

    records: List[AttendanceRecord] = []
    alternatives: List[AlternativeStudent] = []
    alt_keys = set()
    skipped = 0
    for raw_name, raw_time in rows:
        if _is_blank(raw_name):
            continue
        full_name = str(raw_name)
        if any(marker in full_name for marker in EXCLUDE_NAME_MARKERS):
            logger.debug("skipping bot/recording row %r", full_name)
            skipped += 1
            continue

        clean = clean_student_name(full_name)
        key = normalize_for_matching(clean)
        if trainer_key and (key == trainer_key or normalize_for_matching(full_name) == trainer_key):
            logger.debug("skipping trainer row %r", full_name)
            skipped += 1
            continue

        match = roster_index.get(key)
        is_alt = match is None
        minutes = parse_time_to_minutes(raw_time)
        status = PRESENT if minutes >= settings.time_threshold else ABSENT

        if is_alt and status == PRESENT and key not in alt_keys:
            alt_keys.add(key)
            alternatives.append(AlternativeStudent(clean_name=clean, original_name=full_name))

        records.append(AttendanceRecord(
            name=match or clean, original_name=full_name, time=raw_time,
            minutes=minutes, status=status, is_alternative=is_alt,
        ))

    logger.info("reconciled %d rows (%d skipped, %d alternatives, threshold %.2f min)",
                len(records), skipped, len(alternatives), settings.time_threshold)
    return records, alternatives

def present_students(records: Iterable[AttendanceRecord]) -> List[str]:
    out: List[str] = []
    for r in records:
        if r.is_present and not r.is_alternative and r.name not in out:
            out.append(r.name)
    return out

def absent_students(records: Iterable[AttendanceRecord], roster) -> List[str]:
    present_keys = {normalize_for_matching(r.name) for r in records if r.is_present}
    return [n for n in _as_roster(roster) if normalize_for_matching(n) not in present_keys]

# -------------------- table adapter --------------------

def extract_attendance_rows(rows: Sequence[Sequence]) -> List[Tuple[object, object]]:
    """Locate the name and time columns and pull (name, time) pairs out of a decoded table."""
    if not rows:
        raise MissingColumnsError('Could not find required columns. Looking for "Full Name" and "Time in Call".')
    header_idx = find_header_row(rows)
    headers = rows[header_idx]
    name_col = find_column(headers, NAME_ALIASES)
    time_col = find_column(headers, TIME_ALIASES)
    if name_col is None or time_col is None:
        raise MissingColumnsError('Could not find required columns. Looking for "Full Name" and "Time in Call".')
    return [(_cell(row, name_col), _cell(row, time_col)) for row in rows[header_idx + 1:]]

def process_attendance_rows(rows: Sequence[Sequence], roster, settings: Optional[Settings] = None,
                            trainer_name: Optional[str] = None) -> ReconcileResult:
    pairs = extract_attendance_rows(rows)
    records, alternatives = reconcile(pairs, roster, settings, trainer_name)
    return ReconcileResult(
        records=records,
        alternatives=alternatives,
        present=present_students(records),
        absent=absent_students(records, roster),
    )

# -------------------- views --------------------

def is_large_class(result: ReconcileResult, settings: Optional[Settings] = None) -> bool:
    settings = settings or Settings()
    return result.total > settings.large_class_threshold

def roster_status_view(result: ReconcileResult, roster) -> List[Dict]:
    """One row per roster student, for classes too big to list every attendee."""
    present_by_key: Dict[str, AttendanceRecord] = {}
    for r in result.records:
        if r.is_present:
            present_by_key[normalize_for_matching(r.name)] = r
    rows = []
    for name in _as_roster(roster):
        rec = present_by_key.get(normalize_for_matching(clean_student_name(name)))
        rows.append({
            "name": name,
            "time": rec.time if rec else "-",
            "minutes": rec.minutes if rec else 0,
            "status": PRESENT if rec else ABSENT,
        })
    return sorted(rows, key=lambda row: row["name"])

def summarize(result: ReconcileResult) -> Dict[str, int]:
    present = sum(1 for r in result.records if r.is_present)
    return {"present": present, "absent": result.total - present, "total": result.total}
