from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import StorageError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/update-db", methods=["POST"], endpoint="update_roster")
    def update_roster():
        upload = request.files.get("csvFile")
        if upload is None or not upload.filename:
            return jsonify({"success": False, "message": "No CSV file uploaded"}), 400

        try:
            imported = container.roster_service.import_csv_bytes(upload.read())
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StorageError:
            logger.exception("Roster import failed")
            return jsonify({"success": False, "message": "Database error"}), 500

        return jsonify({"success": True, "imported": imported})

    @app.route("/autocomplete", methods=["GET"], endpoint="autocomplete")
    def autocomplete():
        try:
            students = container.roster_service.autocomplete(request.args.get("q", ""))
        except StorageError as e:
            logger.exception("Autocomplete lookup failed")
            return jsonify({"error": str(e)}), 500
        return jsonify([s.to_dict() for s in students])
