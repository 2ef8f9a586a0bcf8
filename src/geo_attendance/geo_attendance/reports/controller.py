from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..common.web import admin_required, domain_error_response, month_year_args
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, OfficeNotConfigured, ValidationError


def _status_arg() -> Optional[AttendanceStatus]:
    raw = request.args.get("status")
    if not raw:
        return None
    try:
        return AttendanceStatus(raw)
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"status must be one of: {allowed}") from None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/summary", methods=["GET"], endpoint="api_admin_summary")
    @admin_required
    def api_admin_summary():
        """Per-employee month summary.

        ``?details=1`` adds the day list; ``?status=late`` (implies details)
        keeps only days with that status.
        """

        try:
            month, year = month_year_args()
            status = _status_arg()
            office = container.office_service.governing_office()
            if office is None:
                raise OfficeNotConfigured()
            summary = container.report_service.monthly_summary(month=month, year=year, office=office)
        except DomainError as e:
            return domain_error_response(e)

        with_days = status is not None or request.args.get("details") in {"1", "true", "yes"}
        return jsonify(
            {
                "success": True,
                "month": month,
                "year": year,
                "employees": [s.to_dict(with_days=with_days, status=status) for s in summary],
            }
        )

    @app.route("/api/admin/today", methods=["GET"], endpoint="api_admin_today")
    @admin_required
    def api_admin_today():
        try:
            stats = container.report_service.today()
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "stats": stats.to_dict()})

    @app.route("/api/admin/suspicious-devices", methods=["GET"], endpoint="api_admin_suspicious_devices")
    @admin_required
    def api_admin_suspicious_devices():
        try:
            month, year = month_year_args()
            devices = container.report_service.suspicious_devices(month=month, year=year)
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "devices": devices})
