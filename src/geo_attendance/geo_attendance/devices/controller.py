from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_role, domain_error_response
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/devices/<user_id>", methods=["GET"], endpoint="api_admin_devices_list")
    @admin_required
    def api_admin_devices_list(user_id: str):
        return jsonify({"success": True, "user_id": user_id, "devices": container.device_service.devices_for(user_id)})

    @app.route("/api/admin/devices/<user_id>", methods=["DELETE"], endpoint="api_admin_devices_clear")
    @admin_required
    def api_admin_devices_clear(user_id: str):
        try:
            removed = container.device_service.clear_user_devices(current_role=current_role(), user_id=user_id)
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True, "removed": removed})

    @app.route("/api/admin/devices", methods=["POST"], endpoint="api_admin_devices_provision")
    @admin_required
    def api_admin_devices_provision():
        body = request.get_json(silent=True) or {}
        try:
            container.device_service.provision(
                current_role=current_role(),
                user_id=str(body.get("user_id") or ""),
                device_id=str(body.get("device_id") or ""),
                force=bool(body.get("force", False)),
            )
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"success": True}), 201
