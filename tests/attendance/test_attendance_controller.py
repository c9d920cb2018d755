from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.training_attendance.training_attendance.attendance.model import AttendanceManagementRow
from src.training_attendance.training_attendance.attendance.service import AttendanceService
from src.training_attendance.training_attendance.container import Container
from src.training_attendance.training_attendance.main import create_app


class AlwaysWorkDay:
    def is_work_day(self, course_id, training_date):
        return True


class InMemoryAttendance:
    def __init__(self):
        self.records = {}
        self._id = 0

    def get_for_student_and_date(self, student_id, training_date):
        return next(
            (r for r in self.records.values() if r.student_id == student_id and r.training_date == training_date),
            None,
        )

    def list_active_for_student(self, student_id):
        return [r for r in self.records.values() if r.student_id == student_id]

    def count_unfilled_past(self, student_id, before_date):
        return sum(
            1
            for r in self.records.values()
            if r.student_id == student_id
            and r.training_date < before_date
            and (not r.training_start_time or not r.training_end_time)
        )

    def get_attendance_management(self, *, course_id, student_id, today):
        return [
            AttendanceManagementRow(training_date=date(2026, 2, 2), section_name="Python basics", is_today=False),
        ]

    def insert(self, record):
        self._id += 1
        self.records[self._id] = replace(record, attendance_id=self._id)
        return self._id

    def update(self, record):
        self.records[record.attendance_id] = record
        return True


@pytest.fixture
def repo():
    return InMemoryAttendance()


@pytest.fixture
def client(monkeypatch, repo, messages, classifier):
    monkeypatch.setenv("APP_ENV", "testing")
    calendar = AlwaysWorkDay()
    container = Container(
        conn=None,
        attendance_repo=repo,
        calendar_repo=calendar,
        messages=messages,
        attendance_service=AttendanceService(repo, calendar, messages, classifier),
    )
    app = create_app(container)
    return app.test_client()


def login(client, **overrides):
    with client.session_transaction() as sess:
        sess.update({"user_id": 7, "role": "student", "account_id": 3, "course_id": 5, "user_name": "Aiko"})
        sess.update(overrides)


def test_requires_session(client):
    resp = client.get("/attendance")
    assert resp.status_code == 401


def test_list(client):
    login(client)

    data = client.get("/attendance").get_json()

    assert data["success"] is True
    assert data["has_unfilled_past"] is False
    assert data["attendance_list"][0]["section_name"] == "Python basics"


def test_punch_in_twice(client, repo):
    login(client)

    first = client.post("/attendance/punch-in")
    second = client.post("/attendance/punch-in")

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.get_json()["success"] is False
    assert len(repo.records) == 1


def test_admin_cannot_punch(client, repo):
    login(client, role="admin")

    resp = client.post("/attendance/punch-out")

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "You are not allowed to perform this operation."


def test_edit_form_lists_menus(client):
    login(client)

    form = client.get("/attendance/edit").get_json()["form"]

    assert form["attendance_list"][0]["training_date"] == "2026-02-02"
    assert form["hour_map"][9] == {"value": 9, "label": "09"}
    assert form["blank_times"][0] == {"value": 15, "label": "15 min"}


def test_update_reports_field_errors(client, repo):
    login(client)

    resp = client.post(
        "/attendance/update",
        json={"attendance_list": [{"training_date": "2026-02-03", "training_start_time_hour": "9", "note": ""}]},
    )

    assert resp.status_code == 400
    body = resp.get_json()
    assert list(body["errors"]) == ["attendance_list[0].training_start_time_minute"]
    assert body["form"]["minute_map"]
    assert repo.records == {}


def test_update_saves_rows(client, repo):
    login(client)

    resp = client.post(
        "/attendance/update",
        json={
            "attendance_list": [
                {
                    "training_date": "2026-02-03",
                    "training_start_time_hour": 9,
                    "training_start_time_minute": 0,
                    "training_end_time_hour": 18,
                    "training_end_time_minute": 0,
                    "blank_time": "60",
                    "note": "ok",
                }
            ]
        },
    )

    assert resp.status_code == 200
    [rec] = repo.records.values()
    assert (rec.student_id, rec.training_start_time, rec.blank_time) == (7, "09:00", 60)


def test_update_rejects_non_numeric_field(client):
    login(client)

    resp = client.post(
        "/attendance/update",
        json={"attendance_list": [{"training_date": "2026-02-03", "training_start_time_hour": "nine"}]},
    )

    assert resp.status_code == 400
    assert "training_start_time_hour" in resp.get_json()["message"]


@pytest.mark.parametrize(
    "item, field",
    [
        ({"training_date": "2026/02/03", "note": "x"}, "attendance_list[0].training_date"),
        ({"training_date": "2026-02-03", "status": 99, "note": "x"}, "attendance_list[0].status"),
        ({"training_date": "2026-02-03", "blank_time": 5000, "note": "x"}, "attendance_list[0].blank_time"),
    ],
)
def test_update_turns_bad_row_values_into_field_errors(client, repo, item, field):
    login(client)

    resp = client.post("/attendance/update", json={"attendance_list": [item]})

    assert resp.status_code == 400
    assert list(resp.get_json()["errors"]) == [field]
    assert repo.records == {}


@pytest.mark.parametrize("path", ["/attendance", "/attendance/edit"])
def test_session_without_course(client, path):
    login(client, role="admin", course_id=None)

    resp = client.get(path)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "No training course is assigned to this account."
