from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest

from src.intern_attendance.intern_attendance.core.enums import RequestStatus
from src.intern_attendance.intern_attendance.core.exceptions import EntryNotFoundError, ValidationError
from src.intern_attendance.intern_attendance.overtime.model import OvertimeRequest
from src.intern_attendance.intern_attendance.overtime.service import OvertimeService, normalize_periods


class FakeOvertimeRepo:
    def __init__(self):
        self.rows = {}

    def create(self, *, person_id, employee_name, job_position, date_completed, department, periods, anticipated_hours, explanation):
        request_id = len(self.rows) + 1
        self.rows[request_id] = OvertimeRequest(
            request_id=request_id,
            person_id=person_id,
            employee_name=employee_name,
            job_position=job_position,
            date_completed=date_completed,
            status=RequestStatus.PENDING,
            created_at=datetime(2026, 3, 1, 9, 0),
            department=department,
            periods=tuple(periods),
            anticipated_hours=anticipated_hours,
            explanation=explanation,
        )
        return request_id

    def get(self, *, request_id):
        return self.rows.get(request_id)

    def list_requests(self, *, person_id=None, status=None, limit=200):
        out = [
            r
            for r in reversed(list(self.rows.values()))
            if (person_id is None or r.person_id == person_id) and (status is None or r.status == status)
        ]
        return out[:limit]

    def decide(self, *, request_id, status, decided_by, approval_date, admin_note=None):
        r = self.rows.get(request_id)
        if r is None or r.status != RequestStatus.PENDING:
            return False
        self.rows[request_id] = replace(
            r, status=status, decided_by=decided_by, approval_date=approval_date, admin_note=admin_note
        )
        return True


@pytest.fixture
def repo():
    return FakeOvertimeRepo()


@pytest.fixture
def service(repo):
    return OvertimeService(repo)


def _submit(service, **kw):
    payload = {
        "person_id": "p1",
        "employee_name": "Ana Cruz",
        "job_position": "Intern",
        "today": date(2026, 3, 1),
    }
    payload.update(kw)
    return service.submit(**payload)


def test_normalize_periods_defaults_end_date_and_drops_blanks():
    periods = normalize_periods(
        [
            {"start_date": "2026-03-02", "start_time": "19:00", "end_time": "22:00"},
            {},
            {"start_date": "", "end_date": "2026-03-09"},
            {"start_date": "2026-03-05", "end_date": "2026-03-06"},
        ]
    )

    assert [(p.start_date, p.end_date) for p in periods] == [
        (date(2026, 3, 2), date(2026, 3, 2)),
        (date(2026, 3, 5), date(2026, 3, 6)),
    ]
    assert periods[0].start_time == "19:00"


@pytest.mark.parametrize(
    "period",
    [
        {"start_date": "03/02/2026"},
        {"start_date": "2026-03-05", "end_date": "2026-03-04"},
    ],
)
def test_normalize_periods_rejects_bad_dates(period):
    with pytest.raises(ValidationError):
        normalize_periods([period])


def test_submit_requires_name_and_position(service):
    with pytest.raises(ValidationError):
        _submit(service, employee_name="  ")
    with pytest.raises(ValidationError):
        _submit(service, job_position=None)


def test_submit_stores_pending_request(repo, service):
    request_id = _submit(service, anticipated_hours="2.5", department=" IT ", explanation="")

    stored = repo.rows[request_id]
    assert stored.status == RequestStatus.PENDING
    assert stored.date_completed == date(2026, 3, 1)
    assert stored.anticipated_hours == Decimal("2.5")
    assert stored.department == "IT"
    assert stored.explanation is None


@pytest.mark.parametrize("hours", ["many", "-1", "NaN", "Infinity", "-inf"])
def test_submit_rejects_bad_hours(service, hours):
    with pytest.raises(ValidationError):
        _submit(service, anticipated_hours=hours)


def test_pending_request_does_not_authorize(service):
    _submit(service, date_completed="2026-03-02")
    assert not service.is_approved_for("p1", date(2026, 3, 2))


def test_approved_request_without_periods_covers_its_completion_date(service):
    request_id = _submit(service, date_completed="2026-03-02")
    service.approve(request_id=request_id, decided_by="admin", today=date(2026, 3, 2))

    assert service.is_approved_for("p1", date(2026, 3, 2))
    assert not service.is_approved_for("p1", date(2026, 3, 3))
    assert not service.is_approved_for("p2", date(2026, 3, 2))


def test_approved_request_covers_its_periods(repo, service):
    request_id = _submit(
        service,
        date_completed="2026-03-01",
        periods=[{"start_date": "2026-03-04", "end_date": "2026-03-06"}],
    )
    service.approve(request_id=request_id, decided_by="admin", approval_date="2026-03-02", admin_note="ok")

    assert repo.rows[request_id].approval_date == date(2026, 3, 2)
    assert repo.rows[request_id].admin_note == "ok"
    assert service.is_approved_for("p1", date(2026, 3, 5))
    assert not service.is_approved_for("p1", date(2026, 3, 1))
    assert not service.is_approved_for("p1", date(2026, 3, 7))


def test_rejected_request_does_not_authorize(service):
    request_id = _submit(service, date_completed="2026-03-02")
    service.reject(request_id=request_id, decided_by="admin", admin_note="no budget")

    assert not service.is_approved_for("p1", date(2026, 3, 2))
    assert service.list_pending() == []


def test_decision_is_final(service):
    request_id = _submit(service)
    service.approve(request_id=request_id, decided_by="admin", today=date(2026, 3, 1))

    with pytest.raises(ValidationError):
        service.reject(request_id=request_id, decided_by="admin")


def test_decide_unknown_request(service):
    with pytest.raises(EntryNotFoundError):
        service.approve(request_id=42, decided_by="admin")


def test_listing(service):
    _submit(service)
    _submit(service, person_id="p2")

    assert [r.person_id for r in service.list_for_person("p2")] == ["p2"]
    assert len(service.list_pending()) == 2


def test_old_approval_still_authorizes_behind_many_newer_requests(service):
    old = _submit(service, periods=[{"start_date": "2026-03-01", "end_date": "2026-06-30"}])
    service.approve(request_id=old, decided_by="admin", today=date(2026, 3, 1))

    for _ in range(205):
        newer = _submit(service, date_completed="2026-02-01")
        service.approve(request_id=newer, decided_by="admin", today=date(2026, 3, 1))

    assert service.is_approved_for("p1", date(2026, 6, 15))
