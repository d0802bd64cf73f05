# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from stockroom.infrastructure.container import Container
from stockroom.infrastructure.db import init_db
from stockroom.interfaces.http.controllers.misc_controller import MiscController
from stockroom.shared.config import load_config
from stockroom.shared.logging import logger, setup_logging
from stockroom.shared.middleware.error_handler import configure_error_handling
from stockroom.shared.middleware.request_logger import configure_request_logging

_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def create_app(container: Container | None = None) -> Flask:
    config = load_config()
    setup_logging(debug_mode=config.debug_logging)
    init_db()

    container = container or Container(config)

    app = Flask(__name__)
    app.config.update(MAX_CONTENT_LENGTH=_MAX_UPLOAD_BYTES)
    configure_error_handling(app)
    configure_request_logging(app)

    CORS(
        app,
        resources={r"/api/*": {"origins": config.security.origins}},
        supports_credentials=True,
    )

    app.register_blueprint(
        MiscController(uploads_dir=config.storage.uploads_dir).as_blueprint()
    )
    app.register_blueprint(container.users_controller.as_blueprint())
    app.register_blueprint(container.products_controller.as_blueprint())
    app.extensions["stockroom.container"] = container

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )

        return resp

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
