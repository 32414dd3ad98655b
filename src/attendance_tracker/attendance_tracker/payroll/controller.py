from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_actor, json_errors, query_date
from ..container import Container
from ..core.exceptions import AuthorizationError
from .summary import MonthlyWindow


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_summary")
    @json_errors
    def attendance_summary():
        if not current_actor().is_admin:
            raise AuthorizationError("administrator login required")

        month = query_date("month")
        month_start, month_end = query_date("month_start"), query_date("month_end")
        if month is None and (month_start or month_end):
            month = MonthlyWindow(start=month_start, end=month_end)

        summaries = container.payroll_report_service.build_summary(
            start=query_date("start"),
            end=query_date("end"),
            month=month,
        )
        return jsonify({"summaries": [s.to_dict() for s in summaries]})
