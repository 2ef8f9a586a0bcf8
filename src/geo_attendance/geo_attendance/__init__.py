"""Geofenced attendance package.

Organized by feature modules (geo, devices, offices, attendance, reports, ...)
with a pure decision core, thin Flask controllers and repository adapters.
"""
