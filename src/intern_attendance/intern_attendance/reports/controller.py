from __future__ import annotations

import csv
import io
import logging
from datetime import date, datetime, timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import ValidationError
from ..container import Container
from .service import REPORT_FIELDS

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "error": message}), status

    def _parse_date(value: str) -> date:
        return datetime.strptime(value, "%Y-%m-%d").date()

    def _range() -> tuple[date, date]:
        today = now_local().date()
        start_s = request.args.get("start") or (today - timedelta(days=DEFAULT_REPORT_DAYS)).strftime("%Y-%m-%d")
        end_s = request.args.get("end") or today.strftime("%Y-%m-%d")
        return _parse_date(start_s), _parse_date(end_s)

    def _write_report_csv(*, data, filename: str):
        """Write consolidated day rows to a CSV response."""

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports/summary", methods=["GET"], endpoint="report_summary")
    def summary():
        try:
            start, end = _range()
            person_id = request.args.get("person_id") or None
            additional = int(request.args.get("additional_minutes") or 0)
        except ValueError:
            return _fail("Invalid start/end/additional_minutes parameter", 400)

        if additional and not person_id:
            return _fail("additional_minutes requires person_id", 400)

        try:
            data = container.report_service.build_attendance_report(
                start=start,
                end=end,
                person_id=person_id,
                additional_minutes={person_id: additional} if person_id else None,
            )
            return jsonify(
                {
                    "start": start.strftime("%Y-%m-%d"),
                    "end": end.strftime("%Y-%m-%d"),
                    "rows": data.rows,
                    "summary": data.summary,
                }
            ), 200
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            logger.exception("Building report failed")
            return _fail("System error while building report", 500)

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="report_csv")
    def report_csv():
        try:
            start, end = _range()
        except ValueError:
            return _fail("Dates must be YYYY-MM-DD", 400)
        person_id = request.args.get("person_id") or None

        try:
            data = container.report_service.build_attendance_report(start=start, end=end, person_id=person_id)
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            logger.exception("Exporting report failed")
            return _fail("System error while exporting report", 500)

        prefix = f"attendance_{person_id}" if person_id else "attendance_report"
        filename = f"{prefix}_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(data=data, filename=filename)
