from .logic import absent_students, present_students, process_attendance_rows, reconcile
from .names import clean_student_name, extract_batch_code, matches_batch, normalize_for_matching
from .report import compose
from .timeparse import parse_time_to_minutes

__version__ = "1.0.0"
