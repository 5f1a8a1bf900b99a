from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def student_id_from_request() -> str:
    """Kiosk pages post JSON; the barcode form posts urlencoded."""

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    value = data.get("studentId")
    if value is None:
        value = request.form.get("studentId", "")
    return str(value).strip()


def register(app: Flask, container: Container) -> None:
    @app.route("/scan", methods=["POST"], endpoint="scan")
    def scan():
        try:
            event = container.presence_service.toggle(student_id_from_request())
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except StorageError:
            logger.exception("Scan failed")
            return jsonify({"success": False, "message": "Database error"}), 500
        return jsonify({"success": True, "action": event.action.value})

    @app.route("/currently-signed-in", methods=["GET"], endpoint="currently_signed_in")
    def currently_signed_in():
        try:
            rows = container.presence_service.currently_signed_in()
        except StorageError as e:
            logger.exception("Presence query failed")
            return jsonify({"error": str(e)}), 500
        return jsonify([r.to_dict() for r in rows])
