"""Payroll System package.

This package is organized by feature modules (cycles, workdays, attendance,
payroll) around a pure payslip calculation engine, with a thin Flask
controller layer on top.
"""
