"""Mira Attendance package.

Organized by feature modules (users, attendance, applications, ai, ...)
with a thin Flask controller layer over service/repository layers.
"""
