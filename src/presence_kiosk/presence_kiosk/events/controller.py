from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import StorageError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/clear-log", methods=["POST"], endpoint="clear_log")
    def clear_log():
        try:
            container.event_log.clear()
        except StorageError:
            logger.exception("Clearing the event log failed")
            return jsonify({"success": False, "message": "Database error"}), 500
        return jsonify({"success": True})

    @app.route("/search", methods=["GET"], endpoint="search_log")
    def search_log():
        term = (request.args.get("q") or "").strip()
        if not term:
            return jsonify({"message": "Search term is required"}), 400

        try:
            logs = container.transcript.search(term)
        except OSError:
            logger.exception("Reading %s failed", container.transcript.path)
            return jsonify({"message": "Error reading log file."}), 500

        if not logs:
            return jsonify({"message": "No logs found for user."}), 404
        return jsonify({"logs": logs})

    @app.route("/full-log", methods=["GET"], endpoint="full_log")
    def full_log():
        try:
            text = container.transcript.read()
        except OSError:
            logger.exception("Reading %s failed", container.transcript.path)
            return jsonify({"message": "Error reading log file."}), 500
        return app.response_class(text, mimetype="text/plain")
