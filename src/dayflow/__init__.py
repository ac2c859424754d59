"""Dayflow HRMS package.

This package is organized by feature modules (users, attendance, salary,
payroll, leaves, ...) with a thin Flask controller layer on top of
service/repository layers.
"""
