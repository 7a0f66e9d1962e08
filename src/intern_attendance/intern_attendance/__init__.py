"""Intern Attendance package.

This package is organized by feature modules (attendance, overtime, reports)
with a thin Flask controller layer and service/repository layers underneath.
The session and time-accounting rules live in ``attendance`` as pure functions.
"""
