from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import AuthorizationError, PersistenceError, ValidationError
from ..container import Container
from ..state.serialization import stamp_to_dict, state_to_dict
from .requests import parse_admin_request

logger = logging.getLogger(__name__)

ADMIN_TOKEN_HEADER = "X-Admin-Token"


def _error(code: str, message: str, status: int):
    resp = jsonify({"error": code, "message": message})
    resp.status_code = status
    resp.headers["Cache-Control"] = "no-store"
    return resp


def _no_store(payload: dict):
    resp = jsonify(payload)
    resp.headers["Cache-Control"] = "no-store"
    return resp


def register(app: Flask, container: Container) -> None:
    @app.route("/api/state", methods=["GET"], endpoint="api_state")
    def api_state():
        try:
            state = container.handover_service.read()
        except Exception:
            logger.exception("reading handover state failed")
            return _error("STATE_READ_FAILED", "Could not read state", 500)
        return _no_store(state_to_dict(state))

    @app.route("/api/admin", methods=["POST"], endpoint="api_admin")
    def api_admin():
        credential = request.headers.get(ADMIN_TOKEN_HEADER)
        try:
            body = request.get_json(silent=True)
            admin_request = parse_admin_request(body, container.operators)
            state, stamp = container.handover_service.apply(admin_request, credential=credential)
        except AuthorizationError as e:
            return _error(e.code, str(e), 401)
        except ValidationError as e:
            return _error(e.code, str(e), 400)
        except PersistenceError as e:
            logger.error("admin write failed: %s", e)
            if e.code == "STATE_CONFLICT":
                return _error(e.code, str(e), 409)
            return _error("ADMIN_FAILED", str(e), 500)
        except Exception:
            logger.exception("admin write failed")
            return _error("ADMIN_FAILED", "Admin action failed", 500)

        payload = {"ok": True, "state": state_to_dict(state)}
        if stamp is not None:
            payload["stamp"] = stamp_to_dict(stamp)
        return _no_store(payload)

    @app.route("/api/overlay", methods=["GET"], endpoint="api_overlay")
    def api_overlay():
        try:
            overlay = container.stats_service.build_overlay()
        except Exception:
            logger.exception("building overlay failed")
            return _error("STATE_READ_FAILED", "Could not read state", 500)
        return _no_store(overlay)
