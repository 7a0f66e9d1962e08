from __future__ import annotations

import logging
from datetime import date, datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_clock_12h, format_minutes
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import AuthorizationError, EntryNotFoundError, ValidationError
from ..container import Container
from ..reports.service import day_to_row
from .model import AttendanceEntry

logger = logging.getLogger(__name__)


def entry_to_dict(e: AttendanceEntry) -> dict:
    return {
        "id": e.entry_id,
        "person_id": e.person_id,
        "date": e.work_date.strftime("%Y-%m-%d"),
        "session": e.session.value if e.session else None,
        "time_in": format_clock_12h(e.time_in),
        "time_out": format_clock_12h(e.time_out) if e.time_out is not None else None,
        "status": e.status.value,
        "late_minutes": e.late_minutes,
        "late_deduction_hours": e.late_deduction_hours,
        "worked_minutes": e.worked_minutes,
        "worked_hours": format_minutes(e.worked_minutes) if e.worked_minutes is not None else None,
        "photo_path": e.photo_path,
        "work_documentation": e.work_documentation,
        "attachments": list(e.attachments),
    }


def register(app: Flask, container: Container) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "error": message}), status

    def _parse_date(value: str) -> date:
        return datetime.strptime(value, "%Y-%m-%d").date()

    def _optional_date(name: str):
        value = request.args.get(name)
        return _parse_date(value) if value else None

    @app.route("/api/attendance/<person_id>/checkin", methods=["POST"], endpoint="attendance_checkin")
    def checkin(person_id: str):
        data = request.get_json(silent=True) or {}
        try:
            entry = container.attendance_service.check_in(person_id, photo_path=data.get("photo_path"))
            return jsonify({"success": True, "entry": entry_to_dict(entry)}), 201
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            logger.exception("Check-in failed for %s", person_id)
            return _fail("System error while checking in", 500)

    @app.route(
        "/api/attendance/<person_id>/checkout/<int:entry_id>",
        methods=["PUT"],
        endpoint="attendance_checkout",
    )
    def checkout(person_id: str, entry_id: int):
        data = request.get_json(silent=True) or {}
        try:
            entry = container.attendance_service.check_out(
                person_id,
                entry_id,
                work_documentation=data.get("work_documentation"),
                attachments=data.get("attachments") or (),
            )
            return jsonify({"success": True, "entry": entry_to_dict(entry)}), 200
        except EntryNotFoundError as e:
            return _fail(str(e), 404)
        except AuthorizationError as e:
            return _fail(str(e), 403)
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            logger.exception("Check-out failed for %s entry %s", person_id, entry_id)
            return _fail("System error while checking out", 500)

    @app.route("/api/attendance/<person_id>/open", methods=["GET"], endpoint="attendance_open")
    def open_entry(person_id: str):
        try:
            entry = container.attendance_service.get_open_entry(person_id)
            return jsonify({"entry": entry_to_dict(entry) if entry else None}), 200
        except Exception:
            logger.exception("Loading open entry failed for %s", person_id)
            return _fail("System error while loading attendance", 500)

    @app.route("/api/attendance/<person_id>/history", methods=["GET"], endpoint="attendance_history")
    def history(person_id: str):
        try:
            limit = int(request.args.get("limit") or DEFAULT_HISTORY_LIMIT)
            rows = container.attendance_service.get_history(person_id, limit=limit)
            return jsonify([entry_to_dict(r) for r in rows]), 200
        except ValueError:
            return _fail("limit must be a number", 400)
        except Exception:
            logger.exception("Loading history failed for %s", person_id)
            return _fail("System error while loading attendance", 500)

    def _days(person_id):
        try:
            start = _optional_date("start")
            end = _optional_date("end")
        except ValueError:
            return _fail("Dates must be YYYY-MM-DD", 400)

        try:
            days = container.attendance_service.list_days(person_id=person_id, start=start, end=end)
            return jsonify([day_to_row(d) for d in days]), 200
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            logger.exception("Loading days failed for %s", person_id or "all")
            return _fail("System error while loading attendance", 500)

    @app.route("/api/attendance/<person_id>/days", methods=["GET"], endpoint="attendance_days")
    def person_days(person_id: str):
        return _days(person_id)

    @app.route("/api/attendance/days", methods=["GET"], endpoint="attendance_days_all")
    def all_days():
        return _days(None)
