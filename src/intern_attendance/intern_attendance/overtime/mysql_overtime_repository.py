from __future__ import annotations

import json
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OvertimePeriod, OvertimeRequest
from .repository import OvertimeRepository

_COLUMNS = """
    request_id, person_id, employee_name, job_position, department, date_completed,
    periods, anticipated_hours, explanation, status, created_at, decided_by,
    approval_date, admin_note
"""


def _load_periods(raw: Optional[str]) -> tuple[OvertimePeriod, ...]:
    if not raw:
        return ()
    return tuple(
        OvertimePeriod(
            start_date=parse_iso_date(p["start_date"]),
            end_date=parse_iso_date(p["end_date"]),
            start_time=p.get("start_time"),
            end_time=p.get("end_time"),
        )
        for p in json.loads(raw)
    )


def _to_request(r: Dict[str, Any]) -> OvertimeRequest:
    return OvertimeRequest(
        request_id=int(r["request_id"]),
        person_id=str(r["person_id"]),
        employee_name=r["employee_name"],
        job_position=r["job_position"],
        department=r.get("department"),
        date_completed=r["date_completed"],
        periods=_load_periods(r.get("periods")),
        anticipated_hours=r.get("anticipated_hours"),
        explanation=r.get("explanation"),
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        decided_by=r.get("decided_by"),
        approval_date=r.get("approval_date"),
        admin_note=r.get("admin_note"),
    )


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        person_id: str,
        employee_name: str,
        job_position: str,
        date_completed: date,
        department: Optional[str],
        periods: Sequence[OvertimePeriod],
        anticipated_hours: Optional[Decimal],
        explanation: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO overtime_requests(
                    person_id, employee_name, job_position, department, date_completed,
                    periods, anticipated_hours, explanation, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    str(person_id),
                    employee_name,
                    job_position,
                    department,
                    date_completed,
                    json.dumps([p.to_dict() for p in periods]),
                    anticipated_hours,
                    explanation,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[OvertimeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM overtime_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_requests(
        self,
        *,
        person_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        limit: Optional[int] = 200,
    ) -> Sequence[OvertimeRequest]:
        clauses = ["1=1"]
        params: list[object] = []
        if person_id is not None:
            clauses.append("person_id=%s")
            params.append(str(person_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(RequestStatus(status).value)
        limit_sql = ""
        if limit is not None:
            limit_sql = "LIMIT %s"
            params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM overtime_requests
                WHERE {' AND '.join(clauses)}
                ORDER BY created_at DESC, request_id DESC
                {limit_sql}
                """,
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: str,
        approval_date: Optional[date],
        admin_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtime_requests
                SET status=%s, decided_by=%s, approval_date=%s, admin_note=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    RequestStatus(status).value,
                    str(decided_by),
                    approval_date,
                    admin_note,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
