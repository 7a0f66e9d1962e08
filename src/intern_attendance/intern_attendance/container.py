from __future__ import annotations

from dataclasses import dataclass

from .attendance.factory import SessionStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.service import OvertimeService
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    overtime_repo: MySQLOvertimeRepository

    attendance_service: AttendanceService
    overtime_service: OvertimeService
    report_service: ReportService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    overtime_repo = MySQLOvertimeRepository(conn)

    overtime_service = OvertimeService(overtime_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        overtime_service,
        strategy_factory=SessionStrategyFactory(),
    )
    report_service = ReportService(attendance_repo)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        overtime_repo=overtime_repo,
        attendance_service=attendance_service,
        overtime_service=overtime_service,
        report_service=report_service,
    )
