from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stats", methods=["GET"], endpoint="api_stats")
    def api_stats():
        day = None
        raw_day = (request.args.get("day") or "").strip()
        if raw_day:
            try:
                day = parse_iso_date(raw_day)
            except ValueError:
                return jsonify({"error": "BAD_DAY", "message": f"Day must be YYYY-MM-DD, got {raw_day!r}"}), 400

        try:
            report = container.stats_service.build_dashboard(day=day)
        except Exception:
            logger.exception("building dashboard failed")
            return jsonify({"error": "STATE_READ_FAILED", "message": "Could not read state"}), 500

        resp = jsonify(asdict(report))
        resp.headers["Cache-Control"] = "no-store"
        return resp
