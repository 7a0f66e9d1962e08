from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import EntryNotFoundError, ValidationError
from ..container import Container
from .model import OvertimeRequest

logger = logging.getLogger(__name__)


def request_to_dict(r: OvertimeRequest) -> dict:
    return {
        "id": r.request_id,
        "person_id": r.person_id,
        "employee_name": r.employee_name,
        "job_position": r.job_position,
        "department": r.department,
        "date_completed": r.date_completed.strftime("%Y-%m-%d"),
        "periods": [p.to_dict() for p in r.periods],
        "anticipated_hours": float(r.anticipated_hours) if r.anticipated_hours is not None else None,
        "explanation": r.explanation,
        "status": r.status.value,
        "created_at": r.created_at.isoformat(),
        "decided_by": r.decided_by,
        "approval_date": r.approval_date.strftime("%Y-%m-%d") if r.approval_date else None,
        "admin_note": r.admin_note,
    }


def register(app: Flask, container: Container) -> None:
    def _fail(message: str, status: int):
        return jsonify({"success": False, "error": message}), status

    @app.route("/api/overtime/<person_id>", methods=["POST"], endpoint="overtime_submit")
    def submit(person_id: str):
        data = request.get_json(silent=True) or {}
        try:
            request_id = container.overtime_service.submit(
                person_id=person_id,
                employee_name=data.get("employee_name"),
                job_position=data.get("job_position"),
                periods=data.get("periods") or [],
                date_completed=data.get("date_completed"),
                department=data.get("department"),
                anticipated_hours=data.get("anticipated_hours"),
                explanation=data.get("explanation"),
            )
            return jsonify({"success": True, "id": request_id}), 201
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            logger.exception("Overtime submit failed for %s", person_id)
            return _fail("Failed to submit overtime request", 500)

    @app.route("/api/overtime/requests/pending", methods=["GET"], endpoint="overtime_pending")
    def pending():
        try:
            return jsonify([request_to_dict(r) for r in container.overtime_service.list_pending()]), 200
        except Exception:
            logger.exception("Loading pending overtime failed")
            return _fail("Failed to load overtime requests", 500)

    @app.route("/api/overtime/<person_id>", methods=["GET"], endpoint="overtime_mine")
    def mine(person_id: str):
        try:
            return jsonify([request_to_dict(r) for r in container.overtime_service.list_for_person(person_id)]), 200
        except Exception:
            logger.exception("Loading overtime failed for %s", person_id)
            return _fail("Failed to load overtime requests", 500)

    def _decide(request_id: int, approve: bool):
        data = request.get_json(silent=True) or {}
        decided_by = str(data.get("decided_by") or "").strip()
        if not decided_by:
            return _fail("decided_by is required", 400)

        try:
            if approve:
                container.overtime_service.approve(
                    request_id=request_id,
                    decided_by=decided_by,
                    approval_date=data.get("approval_date"),
                    admin_note=data.get("admin_note") or "",
                )
            else:
                container.overtime_service.reject(
                    request_id=request_id,
                    decided_by=decided_by,
                    admin_note=data.get("admin_note") or "",
                )
            return jsonify({"success": True}), 200
        except EntryNotFoundError as e:
            return _fail(str(e), 404)
        except ValidationError as e:
            return _fail(str(e), 400)
        except Exception:
            logger.exception("Overtime decision failed for request %s", request_id)
            return _fail("Failed to update overtime request", 500)

    @app.route("/api/overtime/<int:request_id>/approve", methods=["PUT"], endpoint="overtime_approve")
    def approve(request_id: int):
        return _decide(request_id, True)

    @app.route("/api/overtime/<int:request_id>/reject", methods=["PUT"], endpoint="overtime_reject")
    def reject(request_id: int):
        return _decide(request_id, False)
