from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify

from ..container import Container
from ..core.exceptions import DatasetReadError, ResourceNotFoundError


def register(app: Flask, container: Container) -> None:
    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ResourceNotFoundError as e:
                return jsonify({"error": str(e)}), 404
            except DatasetReadError as e:
                app.logger.error("Dataset read failed: %s", e)
                return jsonify({"error": "Published data is not available"}), 503

        return wrapper

    @app.route("/healthz", endpoint="healthz")
    def healthz():
        return jsonify({"status": "ok"})

    @app.route("/api/index", endpoint="api_index")
    @json_errors
    def api_index():
        return jsonify(container.dashboard_service.get_index())

    @app.route("/api/sessions/<session_id>", endpoint="api_session")
    @json_errors
    def api_session(session_id: str):
        return jsonify(container.dashboard_service.get_session(session_id))

    @app.route("/api/groups/<group_id>", endpoint="api_group")
    @json_errors
    def api_group(group_id: str):
        return jsonify(container.dashboard_service.get_group_detail(group_id))

    @app.route("/api/members/<member_id>", endpoint="api_member")
    @json_errors
    def api_member(member_id: str):
        return jsonify(container.dashboard_service.get_member_detail(member_id))
