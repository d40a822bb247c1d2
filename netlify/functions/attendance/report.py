from datetime import date, datetime
from typing import List, Optional, Sequence

from .models import AlternativeStudent, ReportSettings, Settings

# -------------------- formatting helpers --------------------

def format_report_date(value: Optional[str], today: Optional[date] = None) -> str:
    """``YYYY-MM-DD`` to ``DD/MM/YYYY``; unset or unreadable dates use today."""
    d = None
    if value:
        try: d = datetime.strptime(value.strip(), "%Y-%m-%d").date()
        except ValueError: d = None
    if d is None:
        d = today or date.today()
    return d.strftime("%d/%m/%Y")

def _numbered(items: Sequence[str]) -> str:
    return "".join(f"{i}. {item}\n" for i, item in enumerate(items, start=1))

# -------------------- report --------------------

def compose(present: Sequence[str], absent: Sequence[str], alternatives: Sequence[AlternativeStudent],
            meta: Optional[ReportSettings] = None, total_records: Optional[int] = None,
            settings: Optional[Settings] = None, today: Optional[date] = None) -> str:
    """Render the session report.

    ``total_records`` is the number of attendance rows that survived filtering;
    the alternative-students section is dropped above the large-class limit.
    The trainer name is only used for filtering and is never printed.
    """
    meta = meta or ReportSettings()
    settings = settings or Settings()
    if total_records is None:
        total_records = len(present) + len(alternatives)

    report = "🗒 Session Report\n\n"
    if meta.batch_name: report += f"Batch: {meta.batch_name}\n"
    report += f"Date: {format_report_date(meta.report_date, today)}\n"
    if meta.coordinators: report += f"Coordinators: {meta.coordinators}\n"
    if meta.report_creator: report += f"Report by: {meta.report_creator}\n"

    if meta.tldv_link:
        report += f"\n\n🎥 TL;DV:\n{meta.tldv_link}"
    if meta.session_summary:
        report += f"\n\n\n📝 Today's Session Summary:\n\n{meta.session_summary}"

    report += "\n\n\n👥 Participants Present:\n\n"
    report += _numbered(present)

    if alternatives and total_records <= settings.large_class_threshold:
        show_raw = (len(present) + len(alternatives)) < settings.batch_code_display_limit
        names: List[str] = [a.original_name if show_raw else a.clean_name for a in alternatives]
        report += "\n\n⚠️ Alternative Students (Not in Main List):\n\n"
        report += _numbered(names)

    report += "\n\n\n❌ Absentees:\n\n"
    report += _numbered(absent)
    return report
