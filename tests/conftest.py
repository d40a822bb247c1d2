import io
from datetime import date

import pytest
from openpyxl import Workbook

from attendance.models import Settings
from attendance.session import AttendanceSession
from attendance.storage import MemoryStore


@pytest.fixture
def roster_names():
    return ["Ali Khan", "Sara Malik"]


@pytest.fixture
def attendance_rows():
    """Decoded attendance table with a provider comment row above the header"""
    return [
        ["* Meeting report", None],
        ["Full Name", "Time in Call"],
        ["ali  khan", "50:00"],
        ["Sara Malik (BCR78)", "10"],
        ["New Person", "60"],
    ]


@pytest.fixture
def settings():
    return Settings(time_threshold=48)


@pytest.fixture
def store(roster_names):
    return MemoryStore({"students": roster_names})


@pytest.fixture
def session(store):
    return AttendanceSession.open(store)


@pytest.fixture
def today():
    return date(2026, 10, 19)


@pytest.fixture
def truncated_xlsx():
    """First bytes of a real workbook, as left by an interrupted upload"""
    wb = Workbook()
    wb.active.append(["Full Name", "Time in Call"])
    wb.active.append(["Ali Khan", "50:00"])
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()[:300]
