"""Attendance Tracker package.

Feature modules (attendance, employees, payroll, ...) sit on top of a pure
computation core: issue detection, pay calculation and summary aggregation
never touch storage. Flask controllers and MySQL repositories are thin
adapters around it.
"""
