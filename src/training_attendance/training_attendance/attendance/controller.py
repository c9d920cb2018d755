from __future__ import annotations

import logging
from dataclasses import asdict
from functools import wraps
from typing import Any, Optional

from flask import Flask, g, jsonify, request, session

from ..auth.context import ActorContext
from ..common.datetime_utils import format_iso_date, now_local
from ..core.exceptions import AuthorizationError, FormValidationError, ValidationError
from ..container import Container
from .model import AttendanceEditForm, AttendanceManagementRow, DailyEditRow

logger = logging.getLogger(__name__)

_ROW_INT_FIELDS = (
    "attendance_id",
    "training_start_time_hour",
    "training_start_time_minute",
    "training_end_time_hour",
    "training_end_time_minute",
    "blank_time",
    "status",
)


def _opt_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def _management_row_to_json(r: AttendanceManagementRow) -> dict:
    return {
        "training_date": format_iso_date(r.training_date),
        "section_name": r.section_name,
        "is_today": r.is_today,
        "attendance_id": r.attendance_id,
        "training_start_time": r.training_start_time,
        "training_end_time": r.training_end_time,
        "blank_time": r.blank_time,
        "blank_time_value": r.blank_time_value,
        "status": r.status.code,
        "status_disp_name": r.status_disp_name,
        "note": r.note,
    }


def _form_to_json(form: AttendanceEditForm) -> dict:
    data = asdict(form)
    # JSON object keys must be strings; keep menu order.
    for menu in ("blank_times", "hour_map", "minute_map"):
        data[menu] = [{"value": k, "label": v} for k, v in getattr(form, menu).items()]
    return data


def _form_from_json(payload: dict) -> AttendanceEditForm:
    rows = []
    for item in payload.get("attendance_list") or []:
        if not item.get("training_date"):
            raise ValidationError("training_date is required")
        values = {name: _opt_int(item.get(name), name) for name in _ROW_INT_FIELDS}
        rows.append(
            DailyEditRow(
                training_date=str(item["training_date"]),
                note=item.get("note"),
                status_disp_name=str(item.get("status_disp_name") or ""),
                **values,
            )
        )
    return AttendanceEditForm(
        student_id=_opt_int(payload.get("student_id"), "student_id"),
        attendance_list=rows,
    )


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            actor = ActorContext.from_session(session)
            if actor is None:
                return jsonify({"success": False, "message": "Login required"}), 401
            g.actor = actor
            return view(*args, **kwargs)

        return wrapper

    @app.route("/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        actor: ActorContext = g.actor
        today = now_local().date()
        try:
            rows = service.get_attendance_management(course_id=actor.course_id, student_id=actor.user_id, today=today)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify(
            {
                "success": True,
                "has_unfilled_past": service.has_unfilled_past(actor.user_id, today=today),
                "attendance_list": [_management_row_to_json(r) for r in rows],
            }
        )

    @app.route("/attendance/punch-in", methods=["POST"], endpoint="attendance_punch_in")
    @login_required
    def attendance_punch_in():
        try:
            message = service.punch_in(g.actor)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True, "message": message})

    @app.route("/attendance/punch-out", methods=["POST"], endpoint="attendance_punch_out")
    @login_required
    def attendance_punch_out():
        try:
            message = service.punch_out(g.actor)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True, "message": message})

    @app.route("/attendance/edit", methods=["GET"], endpoint="attendance_edit")
    @login_required
    def attendance_edit():
        actor: ActorContext = g.actor
        try:
            rows = service.get_attendance_management(course_id=actor.course_id, student_id=actor.user_id)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        form = service.build_edit_form(actor, rows)
        return jsonify({"success": True, "form": _form_to_json(form)})

    @app.route("/attendance/update", methods=["POST"], endpoint="attendance_update")
    @login_required
    def attendance_update():
        payload = request.get_json(silent=True) or {}
        try:
            form = _form_from_json(payload)
            message = service.update(g.actor, form)
        except FormValidationError as e:
            return (
                jsonify(
                    {
                        "success": False,
                        "errors": e.result.as_dict(),
                        "form": _form_to_json(form),
                    }
                ),
                400,
            )
        except AuthorizationError as e:
            logger.warning("Attendance update refused for user %s: %s", g.actor.user_id, e)
            return jsonify({"success": False, "message": str(e)}), 403
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify({"success": True, "message": message})
