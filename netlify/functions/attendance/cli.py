#!/usr/bin/env python3
"""Command-line interface to the attendance reconciler."""
from __future__ import annotations

import argparse
import json
import sys
import traceback
from typing import Any, Dict

from . import logic, tables
from .config import DATA_FILE, setup_logging
from .session import AttendanceSession
from .storage import JsonFileStore


def _read_bytes(path: str | None) -> bytes | None:
    if not path:
        return None
    with open(path, "rb") as f:
        return f.read()


def _open_session(args: argparse.Namespace) -> AttendanceSession:
    return AttendanceSession.open(JsonFileStore(args.store))


def handle_process(args: argparse.Namespace) -> Dict[str, Any]:
    data = _read_bytes(args.attendance)
    if data is None:
        raise ValueError("Attendance file path is required")
    try:
        params = json.loads(args.params_json or "{}")
    except ValueError:
        params = {}
    session = _open_session(args)
    if params:
        session.update_report_settings(params)
        session.update_settings(params)
    if args.roster:
        session.import_roster(tables.read_table(_read_bytes(args.roster), args.roster))
    result = session.process_attendance(tables.read_table(data, args.attendance))
    if args.export:
        with open(args.export, "wb") as f:
            f.write(tables.export_result_xlsx(result, logic.summarize(result)))
    payload = {"ok": True, "summary": logic.summarize(result), "report": session.report()}
    payload.update(result.to_dict())
    return payload


def handle_roster(args: argparse.Namespace) -> Dict[str, Any]:
    session = _open_session(args)
    payload: Dict[str, Any] = {"ok": True}
    if args.action == "add":
        payload["added"] = [n for n in args.names if session.add_student(n)]
    elif args.action == "remove":
        payload["removed"] = [n for n in args.names if session.remove_student(n)]
    elif args.action == "clear":
        session.clear_students()
    elif args.action == "import":
        if not args.file:
            raise ValueError("Roster file path is required")
        found, added = session.import_roster(tables.read_table(_read_bytes(args.file), args.file))
        payload.update(found=found, added=added)
    payload["students"] = session.roster.sorted()
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Session attendance reconciler")
    parser.add_argument("--store", default=DATA_FILE, help="Path to the JSON data file")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_process = subparsers.add_parser("process", help="Reconcile an attendance file against the roster")
    p_process.add_argument("--attendance", required=True, help="Path to attendance CSV/Excel file")
    p_process.add_argument("--roster", help="Roster file to import first (optional)")
    p_process.add_argument("--params-json", default="{}", help="JSON blob of report settings / threshold")
    p_process.add_argument("--export", help="Write the processed workbook to this path")

    p_roster = subparsers.add_parser("roster", help="Manage the student roster")
    p_roster.add_argument("action", choices=["add", "remove", "clear", "list", "import"])
    p_roster.add_argument("names", nargs="*", help="Student names for add/remove")
    p_roster.add_argument("--file", help="Roster file for import")

    args = parser.parse_args(argv)
    setup_logging(args.debug)

    try:
        if args.command == "process":
            payload = handle_process(args)
        elif args.command == "roster":
            payload = handle_roster(args)
        else:
            raise ValueError(f"Unsupported command: {args.command}")
        print(json.dumps(payload, ensure_ascii=False, default=str))
        return 0
    except (ValueError, OSError) as exc:
        err_payload = {
            "ok": False,
            "error": str(exc),
            "traceback": traceback.format_exc(),
        }
        print(json.dumps(err_payload))
        return 1


if __name__ == "__main__":
    sys.exit(main())
