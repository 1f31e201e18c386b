"""Attendance Engine package.

Feature modules (policy, attendance, reconciliation, reports, payroll) with
SOLID service/repository layers and a thin Flask controller layer.
"""
