"""Shift Attendance package.

Feature modules (shifts, attendance, payroll, ...) sit behind a thin Flask
controller layer. All work-minute arithmetic lives in ``timecalc``.
"""
