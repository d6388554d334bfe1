"""
Flask front end for the Gate.

Routes:
    GET  /              -> greeting
    GET  /secret        -> login form or secret text
    POST /authenticate  -> redirect to /secret, or the invalid-credentials text
    GET  /health        -> liveness probe
"""

import logging
from typing import Optional

from flask import Flask, request, jsonify, redirect, current_app

from secretgate.audit import AuditLog
from secretgate.config import GateConfig
from secretgate.gate import Gate

logger = logging.getLogger("secret_gate.server")

MISSING_FIELDS_MESSAGE = "Missing username or password."
TEXT_PLAIN = {"Content-Type": "text/plain; charset=utf-8"}

def _gate() -> Gate:
    return current_app.extensions["secretgate"]["gate"]

def _audit() -> Optional[AuditLog]:
    return current_app.extensions["secretgate"]["audit"]

def create_app(config: GateConfig, gate: Optional[Gate] = None, audit: Optional[AuditLog] = None) -> Flask:
    """Builds the application. The gate lives as long as the app does."""
    app = Flask(__name__)
    app.config["DEBUG"] = config.debug

    if gate is None:
        gate = Gate(config.username, config.password, config.secret_message)
    if audit is None and config.audit_log:
        audit = AuditLog(config.audit_log)
        logger.info("Audit trail: %s (run %s)", audit.path, audit.run_id)

    app.extensions["secretgate"] = {"gate": gate, "audit": audit}

    @app.route("/", methods=["GET"])
    def root():
        return _gate().show_root()

    @app.route("/secret", methods=["GET"])
    def secret():
        return _gate().show_secret()

    @app.route("/authenticate", methods=["POST"])
    def authenticate():
        username = request.form.get("username", "")
        password = request.form.get("password", "")

        if not username or not password:
            logger.info("Malformed authenticate request from %s", request.remote_addr)
            return MISSING_FIELDS_MESSAGE, 400, TEXT_PLAIN

        result = _gate().authenticate(username, password, source=request.remote_addr)

        audit_log = _audit()
        if audit_log is not None:
            # The gate has already changed state; a failed write must not turn that into a 500.
            try:
                audit_log.record_attempt(username, result.outcome.value, request.remote_addr, unlocked=result.unlocked)
            except OSError:
                logger.exception("Failed to write audit entry for %r to %s", username, audit_log.path)

        if result.ok:
            return redirect(result.redirect_to)
        return result.message, 200, TEXT_PLAIN

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify(status="ok")

    return app
