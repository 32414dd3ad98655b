from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.service import PayrollReportService


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    employees_repo: EmployeeRepository

    attendance_service: AttendanceService
    employee_service: EmployeeService
    payroll_report_service: PayrollReportService


def build_services(*, attendance_repo: AttendanceRepository, employees_repo: EmployeeRepository) -> Container:
    return Container(
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        attendance_service=AttendanceService(attendance_repo),
        employee_service=EmployeeService(employees_repo),
        payroll_report_service=PayrollReportService(attendance_repo, employees_repo),
    )


def build_container(*, db_config: dict) -> Container:
    """Wire the services to MySQL repositories."""
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        attendance_repo=MySQLAttendanceRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
    )
