"""
Contact Notification Service
============================

Flask app exposing POST /contact. Validates the submission, renders it and
relays it by email. Transport failures are returned as JSON errors.

Usage:
    flask --app solarsizer.notify.app run
"""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError

from .config import NotifySettings
from .mailer import NotificationError, send_contact_notification
from .schemas import ContactRequest

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def create_app(settings: Optional[NotifySettings] = None) -> Flask:
    app = Flask(__name__)
    app.config["NOTIFY_SETTINGS"] = settings or NotifySettings.from_env()

    @app.after_request
    def add_cors(resp):
        resp.headers.update(CORS_HEADERS)
        return resp

    @app.route("/contact", methods=["POST", "OPTIONS"])
    def contact():
        if request.method == "OPTIONS":
            return "", 204

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        try:
            req = ContactRequest.model_validate(data)
        except ValidationError as e:
            errors = [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in e.errors()
            ]
            return jsonify({"error": "Invalid submission", "details": errors}), 400

        logger.info("Received contact submission from %s via %s", req.name, req.contact_method)
        try:
            result = send_contact_notification(req, app.config["NOTIFY_SETTINGS"])
        except NotificationError as e:
            logger.exception("Contact notification failed")
            return jsonify({"error": str(e)}), e.status_code

        return jsonify(result), 200

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(debug=False)
