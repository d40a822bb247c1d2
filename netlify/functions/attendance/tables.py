import csv
import io
import logging
import os
from typing import List, Optional

import pandas as pd

from .models import ReconcileResult

logger = logging.getLogger(__name__)

APP_FILE_DEFAULT = "attendance_processed.xlsx"
EXCEL_EXTS = (".xlsx", ".xls")

# -------------------- readers --------------------

def _decode_text(data: bytes) -> str:
    for enc in ("utf-8-sig", "utf-16"):
        try:
            return data.decode(enc)
        except UnicodeError:
            continue
    return data.decode("utf-8", errors="replace")

def _frame_to_rows(df: pd.DataFrame) -> List[list]:
    df = df.astype(object).where(pd.notna(df), None)
    return [list(row) for row in df.itertuples(index=False, name=None)]

def _read_csv_rows(data: bytes) -> List[list]:
    text = _decode_text(data)
    if not text.strip():
        return []
    # provider comment rows are narrower than the table, so size columns up front
    try:
        dialect = csv.Sniffer().sniff(text[:4096], delimiters=",;\t")
        sep = dialect.delimiter
    except csv.Error:
        sep = ","
    width = max((len(r) for r in csv.reader(io.StringIO(text), delimiter=sep)), default=0)
    df = pd.read_csv(io.StringIO(text), header=None, names=list(range(width)), dtype=str,
                     sep=sep, engine="python", skip_blank_lines=True, keep_default_na=False)
    rows = _frame_to_rows(df)
    return [[c if c != "" else None for c in row] for row in rows]

def _read_excel_rows(data: bytes) -> List[list]:
    try:
        df = pd.read_excel(io.BytesIO(data), sheet_name=0, header=None, dtype=object)
    except Exception as e:
        # zip, xml and engine errors all mean the upload is unreadable
        raise ValueError(f"Error parsing Excel file: {e}") from e
    return _frame_to_rows(df)

def read_table(data: bytes, filename: str) -> List[list]:
    """Decode an uploaded CSV or workbook (first sheet) into rows of cells."""
    ext = os.path.splitext(filename or "")[1].lower()
    if ext == ".csv":
        try:
            rows = _read_csv_rows(data)
        except (pd.errors.ParserError, csv.Error) as e:
            raise ValueError(f"Error parsing CSV file: {e}") from e
    elif ext in EXCEL_EXTS:
        rows = _read_excel_rows(data)
    else:
        raise ValueError("Unsupported file format. Please upload CSV or Excel file.")
    logger.debug("read %d rows from %s", len(rows), filename)
    return rows

# -------------------- export --------------------

def export_result_xlsx(result: ReconcileResult, summary: Optional[dict] = None) -> bytes:
    records_df = pd.DataFrame([
        {"Student Name": r.name, "Original Name": r.original_name, "Time in Call": r.time,
         "Minutes": round(r.minutes, 2), "Status": r.status,
         "Type": "Alternative" if r.is_alternative else "Regular"}
        for r in result.records
    ], columns=["Student Name", "Original Name", "Time in Call", "Minutes", "Status", "Type"])
    alt_df = pd.DataFrame([{"Name": a.clean_name, "Original Name": a.original_name} for a in result.alternatives],
                          columns=["Name", "Original Name"])
    present_df = pd.DataFrame({"Name": result.present})
    absent_df = pd.DataFrame({"Name": result.absent})
    summary_df = pd.DataFrame(list((summary or {}).items()), columns=["Metric", "Value"])

    last_err = None
    for engine in ("openpyxl", "xlsxwriter"):
        buf = io.BytesIO()
        try:
            with pd.ExcelWriter(buf, engine=engine) as w:
                records_df.to_excel(w, index=False, sheet_name="Attendance")
                present_df.to_excel(w, index=False, sheet_name="Present")
                absent_df.to_excel(w, index=False, sheet_name="Absent")
                alt_df.to_excel(w, index=False, sheet_name="Alternatives")
                summary_df.to_excel(w, index=False, sheet_name="Summary")
        except (ImportError, ValueError) as e:
            logger.warning("excel engine %s failed: %s", engine, e)
            last_err = e
            continue
        return buf.getvalue()
    raise RuntimeError(f"Could not write workbook: {last_err}")
