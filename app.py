#!/usr/bin/env python3
# Secret gate: public greeting at /, secret message at /secret behind HTTP Basic Auth,
# health/version probes. Settings come from the environment (.env supported).
from typing import Optional
from flask import Flask, Response, current_app, jsonify
from werkzeug.exceptions import NotFound

from authwrap import EXTENSION_KEY, AuthenticationError, BasicAuthGate, requires_auth
from config import Settings, load_settings

APP_VERSION = "1.0.0"
GREETING = "Hello, world!"


def _text(body: str, status: int = 200, headers=None) -> Response:
    return Response(body, status=status, headers=headers, mimetype="text/plain")


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


# -------------------- Routes --------------------
def home():
    return _text(GREETING)


@requires_auth
def secret():
    return _text(_settings().secret_message)


def healthz():
    s = _settings()
    return jsonify({"ok": s.credentials.configured, "warnings": s.warnings()})


def version():
    return jsonify({"version": APP_VERSION})


# -------------------- Error handlers --------------------
def on_auth_error(err: AuthenticationError):
    return _text(err.description, err.code, {"WWW-Authenticate": err.challenge})


def on_not_found(err: NotFound):
    return _text("Not Found", 404)


# -------------------- Factory --------------------
def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or load_settings()
    app = Flask(__name__)
    app.logger.setLevel(settings.log_level)
    app.config["SETTINGS"] = settings
    app.extensions[EXTENSION_KEY] = BasicAuthGate(settings.credentials, realm=settings.realm)

    app.add_url_rule("/", "home", home, methods=["GET"])
    app.add_url_rule("/secret", "secret", secret, methods=["GET"])
    app.add_url_rule("/healthz", "healthz", healthz, methods=["GET"])
    app.add_url_rule("/version", "version", version, methods=["GET"])
    app.register_error_handler(AuthenticationError, on_auth_error)
    app.register_error_handler(NotFound, on_not_found)

    for w in settings.warnings():
        app.logger.warning("config: %s", w)
    if not settings.credentials.configured:
        app.logger.warning("basic auth: credentials not configured, /secret will reject every request")
    return app


# -------------------- Entry --------------------
if __name__ == "__main__":
    app = create_app()
    port = app.config["SETTINGS"].port
    app.logger.info("listening on port %d", port)
    app.run(host="0.0.0.0", port=port)
