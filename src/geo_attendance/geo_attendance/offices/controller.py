from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, domain_error_response, error_response, login_required
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/office", methods=["GET"], endpoint="api_office")
    @login_required
    def api_office():
        office = container.office_service.governing_office()
        if office is None:
            return error_response("Office location not loaded", 503, kind="office_not_configured")
        return jsonify({"success": True, "office": office.to_dict()})

    @app.route("/api/admin/offices", methods=["GET"], endpoint="api_admin_offices")
    @admin_required
    def api_admin_offices():
        offices = container.office_service.list_offices()
        return jsonify({"success": True, "offices": [o.to_dict() for o in offices]})

    @app.route("/api/admin/offices", methods=["POST"], endpoint="api_admin_offices_create")
    @admin_required
    def api_admin_offices_create():
        try:
            office_id = container.office_service.create(
                current_role=current_role(), payload=request.get_json(silent=True) or {}
            )
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "id": office_id}), 201

    @app.route("/api/admin/offices/<int:office_id>", methods=["PUT"], endpoint="api_admin_offices_update")
    @admin_required
    def api_admin_offices_update(office_id: int):
        try:
            office = container.office_service.update(
                current_role=current_role(), office_id=office_id, payload=request.get_json(silent=True) or {}
            )
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "office": office.to_dict()})

    @app.route("/api/admin/offices/<int:office_id>", methods=["DELETE"], endpoint="api_admin_offices_delete")
    @admin_required
    def api_admin_offices_delete(office_id: int):
        try:
            container.office_service.delete(current_role=current_role(), office_id=office_id)
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True})
