# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, Response, jsonify, send_from_directory

from stockroom.infrastructure.health import check_database
from stockroom.infrastructure.observability import render_metrics
from stockroom.shared.logging import logger


class MiscController:
    def __init__(self, *, uploads_dir: Path) -> None:
        self._uploads_dir = uploads_dir

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.home, methods=["GET"])
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule("/api/metrics", view_func=self.metrics, methods=["GET"])
        bp.add_url_rule("/uploads/<path:name>", view_func=self.uploads, methods=["GET"])
        return bp

    def home(self):
        return "Home Page"

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            check_database()
            status["database"] = "ok"
        except Exception as exc:  # pragma: no cover
            logger.exception("health: database check failed")
            status["ok"] = False
            status["database"] = f"error: {type(exc).__name__}"
        return jsonify(status), 200 if status["ok"] else 503

    def metrics(self):
        body, content_type = render_metrics()
        return Response(body, content_type=content_type)

    def uploads(self, name: str):
        return send_from_directory(self._uploads_dir.resolve(), name)
