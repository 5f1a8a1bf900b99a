from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..container import Container
from ..presence.controller import student_id_from_request

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/send-to-library", methods=["POST"], endpoint="send_to_library")
    def send_to_library():
        try:
            container.transfer_service.dispatch(student_id_from_request())
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except StorageError:
            logger.exception("Dispatch failed")
            return jsonify({"success": False}), 500
        return jsonify({"success": True})

    @app.route("/confirm-arrival", methods=["POST"], endpoint="confirm_arrival")
    def confirm_arrival():
        try:
            container.transfer_service.confirm_arrival(student_id_from_request())
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StorageError:
            logger.exception("Confirm arrival failed")
            return jsonify({"success": False}), 500
        return jsonify({"success": True})
