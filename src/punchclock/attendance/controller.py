from __future__ import annotations

from flask import Flask, jsonify

from ..access.flask_guard import auth_required, current_identity
from ..api.payload import json_body, optional_int_arg
from ..common.datetime_utils import format_time
from ..container import Container
from ..core.constants import API_PREFIX, DEFAULT_HISTORY_LIMIT
from ..core.enums import PunchType
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    gate = container.access_gate

    @app.route(f"{API_PREFIX}/attendance/punch", methods=["POST"], endpoint="punch")
    @auth_required(gate)
    def punch():
        identity = current_identity()
        try:
            punch_type = PunchType(json_body().get("type"))
        except ValueError:
            raise ValidationError("type must be 'in' or 'out'")

        if punch_type is PunchType.IN:
            punched_at = container.attendance_service.punch_in(identity.user_id)
            return jsonify({"message": "Punched in successfully", "time": format_time(punched_at)})

        result = container.attendance_service.punch_out(identity.user_id)
        return jsonify(
            {
                "message": "Punched out successfully",
                "time": format_time(result.punch_out),
                "totalHours": result.total_hours,
            }
        )

    @app.route(f"{API_PREFIX}/attendance/today", methods=["GET"], endpoint="attendance_today")
    @auth_required(gate)
    def attendance_today():
        record = container.attendance_service.today_record(current_identity().user_id)
        return jsonify(record.to_dict() if record else None)

    @app.route(f"{API_PREFIX}/attendance", methods=["GET"], endpoint="attendance_records")
    @auth_required(gate)
    def attendance_records():
        identity = current_identity()
        target_user_id = optional_int_arg("user_id")
        if target_user_id is None:
            target_user_id = identity.user_id
        limit = optional_int_arg("limit")
        if limit is None:
            limit = DEFAULT_HISTORY_LIMIT

        records = container.attendance_service.list_records(
            requester_id=identity.user_id,
            requester_role=identity.role,
            target_user_id=target_user_id,
            limit=limit,
        )
        return jsonify([r.to_dict() for r in records])
