from __future__ import annotations

import json
from datetime import date, time
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import OpenSessionError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import AttendanceEntry
from .repository import AttendanceRepository

_SELECT = """
    SELECT
        a.entry_id, a.person_id, a.work_date, a.time_in, a.time_out, a.status,
        a.late_deduction_hours, a.late_minutes, a.worked_minutes, a.photo_path,
        a.work_documentation, a.attachments, a.ot_time_in, a.ot_time_out,
        p.full_name
    FROM attendance a
    LEFT JOIN people p ON p.person_id = a.person_id
"""


def _to_entry(r: Dict[str, Any]) -> AttendanceEntry:
    row = dict(r)
    for col in ("time_in", "time_out", "ot_time_in", "ot_time_out"):
        row[col] = normalize_mysql_time(row.get(col))
    return AttendanceEntry.from_row(row)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_attendance(
        self,
        *,
        person_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceEntry]:
        clauses: list[str] = []
        params: list[object] = []

        if person_id is not None:
            clauses.append("a.person_id=%s")
            params.append(str(person_id))
        if start_date is not None:
            clauses.append("a.work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("a.work_date <= %s")
            params.append(end_date)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                {where}
                ORDER BY a.work_date DESC, a.time_in DESC
                """,
                tuple(params),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_for_person_and_date(self, person_id: str, work_date: date) -> Sequence[AttendanceEntry]:
        return self.list_attendance(person_id=person_id, start_date=work_date, end_date=work_date)

    def get_recent_for_person(self, person_id: str, limit: int) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE a.person_id=%s
                ORDER BY a.work_date DESC, a.time_in DESC
                LIMIT %s
                """,
                (str(person_id), int(limit)),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def get_open_for_person(self, person_id: str) -> Optional[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE a.person_id=%s AND a.time_out IS NULL
                ORDER BY a.work_date DESC, a.time_in DESC
                LIMIT 1
                """,
                (str(person_id),),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def get_by_id(self, entry_id: int) -> Optional[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.entry_id=%s", (int(entry_id),))
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def insert_attendance(
        self,
        *,
        person_id: str,
        work_date: date,
        time_in: time,
        status: AttendanceStatus,
        late_deduction_hours: int,
        late_minutes: int,
        photo_path: Optional[str] = None,
    ) -> AttendanceEntry:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(
                        person_id, work_date, time_in, status,
                        late_deduction_hours, late_minutes, photo_path
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        str(person_id),
                        work_date,
                        time_in,
                        AttendanceStatus(status).value,
                        int(late_deduction_hours),
                        int(late_minutes),
                        photo_path,
                    ),
                )
                entry_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            # uq_attendance_one_open: another check-in won the race.
            raise OpenSessionError("Please check out your current session before checking in again") from e

        return AttendanceEntry(
            entry_id=entry_id,
            person_id=str(person_id),
            work_date=work_date,
            time_in=time_in,
            status=AttendanceStatus(status),
            late_deduction_hours=int(late_deduction_hours),
            late_minutes=int(late_minutes),
            photo_path=photo_path,
        )

    def update_checkout(
        self,
        *,
        entry_id: int,
        time_out: time,
        worked_minutes: int,
        work_documentation: Optional[str],
        attachments: Sequence[str] = (),
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET time_out=%s, worked_minutes=%s, work_documentation=%s, attachments=%s
                WHERE entry_id=%s AND time_out IS NULL
                """,
                (
                    time_out,
                    int(worked_minutes),
                    work_documentation,
                    json.dumps(list(attachments)) if attachments else None,
                    int(entry_id),
                ),
            )
            return cur.rowcount > 0
