from __future__ import annotations

from flask import Flask, jsonify

from ..access.flask_guard import auth_required, current_identity
from ..container import Container
from ..core.constants import API_PREFIX


def register(app: Flask, container: Container) -> None:
    @app.route(f"{API_PREFIX}/dashboard", methods=["GET"], endpoint="dashboard")
    @auth_required(container.access_gate)
    def dashboard():
        identity = current_identity()
        summary = container.dashboard_service.summarize(requester_id=identity.user_id, requester_role=identity.role)
        return jsonify(summary.to_dict())
