from __future__ import annotations

from flask import Flask, jsonify

from ..access.flask_guard import auth_required, current_identity
from ..api.payload import json_body
from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.constants import API_PREFIX
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    gate = container.access_gate

    @app.route(f"{API_PREFIX}/leave-requests", methods=["POST"], endpoint="submit_leave")
    @auth_required(gate)
    def submit_leave():
        data = json_body()
        request_id = container.leave_service.submit(
            user_id=current_identity().user_id,
            leave_type=data.get("leave_type", ""),
            start_date=parse_iso_date(data.get("start_date", ""), "start_date"),
            end_date=parse_iso_date(data.get("end_date", ""), "end_date"),
            reason=data.get("reason"),
        )
        return jsonify({"id": request_id, "message": "Leave request submitted successfully"}), 201

    @app.route(f"{API_PREFIX}/leave-requests", methods=["GET"], endpoint="list_leaves")
    @auth_required(gate)
    def list_leaves():
        identity = current_identity()
        requests = container.leave_service.list_requests(requester_id=identity.user_id, requester_role=identity.role)
        return jsonify([r.to_dict() for r in requests])

    @app.route(f"{API_PREFIX}/leave-requests/<int:request_id>", methods=["PUT"], endpoint="resolve_leave")
    @auth_required(gate, role=Role.ADMIN)
    def resolve_leave(request_id: int):
        identity = current_identity()
        status = container.leave_service.resolve(
            request_id=request_id,
            resolver_id=identity.user_id,
            resolver_role=identity.role,
            new_status=json_body().get("status", ""),
        )
        return jsonify({"message": f"Leave request {status.value} successfully"})
