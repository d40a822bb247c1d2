import json
import logging
from typing import Optional

from fastapi import FastAPI, File, Form, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from mangum import Mangum

from . import logic, tables
from .config import setup_logging
from .names import clean_student_name
from .session import STUDENTS_KEY, AttendanceSession
from .storage import MemoryStore

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI()


def _json_form(raw: str, default):
    try:
        value = json.loads(raw or "null")
    except ValueError:
        return default
    return value if isinstance(value, type(default)) else default

async def _run(attendance: UploadFile, roster: Optional[UploadFile], params: str, students: str) -> AttendanceSession:
    params_obj = _json_form(params, {})
    names = [clean_student_name(n) for n in _json_form(students, []) if isinstance(n, str)]
    session = AttendanceSession.open(MemoryStore({STUDENTS_KEY: [n for n in names if n]}))
    session.update_report_settings(params_obj)
    session.update_settings(params_obj)
    if roster is not None:
        session.import_roster(tables.read_table(await roster.read(), roster.filename))
    session.process_attendance(tables.read_table(await attendance.read(), attendance.filename))
    return session

@app.get("/api/health")
def health():
    return {"ok": True}

@app.post("/api/process")
async def process(
    attendance: UploadFile = File(...),
    roster: UploadFile | None = File(None),
    params: str = Form("{}"),
    students: str = Form("[]"),
):
    try:
        session = await _run(attendance, roster, params, students)
    except ValueError as e:
        logger.info("rejected upload %s: %s", attendance.filename, e)
        return JSONResponse(status_code=400, content={"error": str(e)})

    result = session.result
    payload = result.to_dict()
    payload.update(
        students=session.roster.names,
        summary=logic.summarize(result),
        large_class=logic.is_large_class(result, session.settings),
        rows=session.status_rows(),
        report=session.report(),
    )
    return JSONResponse(content=jsonable_encoder(payload))

@app.post("/api/export")
async def export(
    attendance: UploadFile = File(...),
    roster: UploadFile | None = File(None),
    params: str = Form("{}"),
    students: str = Form("[]"),
):
    try:
        session = await _run(attendance, roster, params, students)
    except ValueError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    out_bytes = tables.export_result_xlsx(session.result, logic.summarize(session.result))
    headers = {
        "Content-Disposition": f"attachment; filename={tables.APP_FILE_DEFAULT}",
        "X-Attendance-Summary": json.dumps(logic.summarize(session.result)),
    }
    return Response(
        content=out_bytes,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )

handler = Mangum(app)
