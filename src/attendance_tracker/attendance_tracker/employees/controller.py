from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_actor, json_body, json_errors
from ..container import Container
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @json_errors
    def list_employees():
        if not current_actor().is_admin:
            raise AuthorizationError("administrator login required")
        return jsonify({"employees": [e.to_dict() for e in container.employee_service.list_employees()]})

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @json_errors
    def update_employee(employee_id: str):
        body = json_body()
        employee = container.employee_service.update_employee(
            current_actor(),
            employee_id,
            name=body.get("name"),
            hourly_rate=body.get("hourlyRate"),
            role=body.get("role"),
        )
        return jsonify({"employee": employee.to_dict()})

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @json_errors
    def delete_employee(employee_id: str):
        container.employee_service.delete_employee(current_actor(), employee_id)
        return jsonify({"success": True})

    @app.route("/api/employees/<employee_id>/wage-history", methods=["POST"], endpoint="add_wage_history")
    @json_errors
    def add_wage_history(employee_id: str):
        body = json_body()
        entry = container.employee_service.add_wage_history(
            current_actor(),
            employee_id=employee_id,
            hourly_rate=body.get("hourlyRate"),
            effective_date=body.get("effectiveDate"),
        )
        return jsonify({"wageHistory": {"employeeId": employee_id, **entry.to_dict()}})
