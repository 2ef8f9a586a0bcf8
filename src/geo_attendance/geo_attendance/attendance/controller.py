from __future__ import annotations

import csv
import io
import logging

from flask import Flask, jsonify, request

from ..common.validators import optional_coordinate
from ..common.web import current_user_id, domain_error_response, error_response, login_required, month_year_args
from ..container import Container
from ..core.exceptions import DomainError
from ..reports.service import timeline_rows

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _attempt(action: str):
        body = request.get_json(silent=True) or {}
        try:
            location = optional_coordinate(body.get("latitude"), body.get("longitude"))
            handler = (
                container.attendance_service.check_in
                if action == "check-in"
                else container.attendance_service.check_out
            )
            event = handler(current_user_id(), location=location, device_id=body.get("device_id") or None)
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("%s failed for user %s", action, current_user_id())
            return error_response(f"System error while recording {action}", 500)

        return jsonify({"success": True, "event": event.to_dict()}), 201

    # No login_required here: a missing user context is reported by the
    # recorder itself as not_authenticated.
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    def api_check_in():
        return _attempt("check-in")

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    def api_check_out():
        return _attempt("check-out")

    @app.route("/api/attendance/today", methods=["GET"], endpoint="api_today")
    @login_required
    def api_today():
        try:
            events = container.attendance_service.today_events(current_user_id())
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "records": [e.to_dict() for e in events]})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="api_history")
    @login_required
    def api_history():
        try:
            month, year = month_year_args()
            days = container.attendance_service.month_history(current_user_id(), month=month, year=year)
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "month": month, "year": year, "history": [d.to_dict() for d in days]})

    @app.route("/api/attendance/history.csv", methods=["GET"], endpoint="api_history_csv")
    @login_required
    def api_history_csv():
        try:
            month, year = month_year_args()
            office = container.office_service.governing_office()
            days = container.attendance_service.month_history(current_user_id(), month=month, year=year)
        except DomainError as e:
            return domain_error_response(e)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=["date", "check_in", "check_out", "status", "hours_worked"])
        writer.writeheader()
        for row in timeline_rows(days, office):
            writer.writerow(row)

        filename = f"attendance_{year}{month:02d}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
