"""Attendance & payroll-snapshot package.

Organized by feature modules (shifts, employees, attendance, payroll) with a
thin Flask controller layer over service/repository layers.
"""
