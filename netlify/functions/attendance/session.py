import logging
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

from . import logic
from .config import default_settings
from .models import ReconcileResult, ReportSettings, Settings
from .report import compose
from .roster import Roster
from .storage import MemoryStore

logger = logging.getLogger(__name__)

STUDENTS_KEY = "students"
REPORT_SETTINGS_KEY = "reportSettings"
SETTINGS_KEY = "attendanceSettings"


class AttendanceSession:
    """Roster, settings and the latest reconciliation for one store.

    ``load`` pulls state from the store; every roster or settings mutation is
    written straight back. Reconciliation results are never persisted.
    """

    def __init__(self, store=None):
        self.store = store if store is not None else MemoryStore()
        self.roster = Roster()
        self.settings: Settings = default_settings()
        self.report_settings = ReportSettings()
        self.result: Optional[ReconcileResult] = None

    @classmethod
    def open(cls, store=None) -> "AttendanceSession":
        session = cls(store)
        session.load()
        return session

    # -------------------- lifecycle --------------------

    def load(self) -> None:
        self.roster = Roster(self.store.get(STUDENTS_KEY) or [])
        self.settings = Settings.from_dict(self.store.get(SETTINGS_KEY) or {}, base=default_settings())
        self.report_settings = ReportSettings.from_dict(self.store.get(REPORT_SETTINGS_KEY) or {})
        self.result = None
        logger.debug("session loaded: %d students", len(self.roster))

    def save_roster(self) -> None:
        self.store.set(STUDENTS_KEY, self.roster.names)

    def save_settings(self) -> None:
        self.store.set(SETTINGS_KEY, self.settings.to_dict())

    def save_report_settings(self) -> None:
        self.store.set(REPORT_SETTINGS_KEY, self.report_settings.to_dict())

    # -------------------- roster --------------------

    def import_roster(self, rows: Sequence[Sequence]) -> Tuple[int, int]:
        found, added = self.roster.import_rows(rows)
        self.save_roster()
        return found, added

    def add_student(self, name: str) -> bool:
        added = self.roster.add(name)
        if added:
            self.save_roster()
        return added

    def remove_student(self, name: str) -> bool:
        removed = self.roster.remove(name)
        if removed:
            self.save_roster()
        return removed

    def clear_students(self) -> None:
        self.roster.clear()
        self.save_roster()

    # -------------------- settings --------------------

    def update_report_settings(self, data: Dict) -> None:
        self.report_settings.update(data or {})
        self.save_report_settings()

    def update_settings(self, data: Dict) -> None:
        self.settings = Settings.from_dict(data or {}, base=self.settings)
        self.save_settings()

    # -------------------- attendance --------------------

    def process_attendance(self, rows: Sequence[Sequence]) -> ReconcileResult:
        self.result = logic.process_attendance_rows(
            rows, self.roster, self.settings, self.report_settings.trainer_name or None)
        return self.result

    def report(self, today: Optional[date] = None) -> str:
        result = self.result or ReconcileResult(absent=self.roster.names)
        return compose(result.present, result.absent, result.alternatives, self.report_settings,
                       total_records=result.total, settings=self.settings, today=today)

    def status_rows(self) -> List[Dict]:
        """Per-roster view for large classes, otherwise every record."""
        result = self.result or ReconcileResult()
        if logic.is_large_class(result, self.settings):
            return logic.roster_status_view(result, self.roster)
        return [dict(name=r.name, time=r.time, minutes=r.minutes, status=r.status,
                     type="Alternative" if r.is_alternative else "Regular") for r in result.records]
