"""Punch-board package.

Organized by feature modules (employees, attendance, summary, realtime)
with a thin Flask controller layer over service/repository layers.
"""
