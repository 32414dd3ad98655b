from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_actor, json_errors, query_date
from ..container import Container
from ..core.constants import DEFAULT_RECORD_DAYS
from ..core.exceptions import AuthorizationError, ValidationError
from .actions import parse_clock_action


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clock", methods=["POST"], endpoint="clock")
    @json_errors
    def clock():
        actor = current_actor()
        action = parse_clock_action(request.get_json(silent=True))
        record = container.attendance_service.apply(actor, action)
        return jsonify({"record": record.to_dict()})

    @app.route("/api/me/records", methods=["GET"], endpoint="my_records")
    @json_errors
    def my_records():
        days = request.args.get("days", "")
        records = container.attendance_service.own_records(
            current_actor(),
            days=int(days) if days.isdigit() else None,
            start=query_date("start"),
            end=query_date("end"),
        )
        return jsonify({"records": [r.to_dict() for r in records]})

    @app.route("/api/employees/<employee_id>/records", methods=["GET"], endpoint="employee_records")
    @json_errors
    def employee_records(employee_id: str):
        actor = current_actor()
        if not actor.is_admin and actor.employee_id != employee_id:
            raise AuthorizationError("not allowed to view these records")

        employee = container.employee_service.get(employee_id)
        days = request.args.get("days")
        if days is not None and not days.isdigit():
            raise ValidationError("days must be a positive integer")

        records = container.attendance_service.records_for_employee(
            employee_id,
            days=int(days) if days else DEFAULT_RECORD_DAYS,
            start=query_date("start"),
            end=query_date("end"),
        )
        return jsonify({"employee": employee.to_dict(), "records": [r.to_dict() for r in records]})
