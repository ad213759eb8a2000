from __future__ import annotations

from flask import Flask, jsonify

from ..access.flask_guard import auth_required, current_identity
from ..api.payload import json_body
from ..container import Container
from ..core.constants import API_PREFIX
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    gate = container.access_gate

    @app.route(f"{API_PREFIX}/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        result = container.auth_service.login(data.get("email", ""), data.get("password", ""))
        return jsonify(result)

    @app.route(f"{API_PREFIX}/employees", methods=["GET"], endpoint="list_employees")
    @auth_required(gate, role=Role.ADMIN)
    def list_employees():
        return jsonify(container.employee_service.list_employees(requester_role=current_identity().role))

    @app.route(f"{API_PREFIX}/employees", methods=["POST"], endpoint="create_employee")
    @auth_required(gate, role=Role.ADMIN)
    def create_employee():
        data = json_body()
        user_id = container.employee_service.create_employee(
            requester_role=current_identity().role,
            employee_code=data.get("employee_id", ""),
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
            department=data.get("department"),
        )
        return jsonify({"id": user_id, "message": "Employee created successfully"}), 201
