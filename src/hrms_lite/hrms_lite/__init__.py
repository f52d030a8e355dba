"""HRMS Lite package.

This package is organized by feature modules (employees, attendance, dashboard)
with a thin Flask controller layer over service/repository layers.
"""
