# -*- coding: utf-8 -*-
"""
Daily puzzles - Routes (Blueprint endpoints)
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request

from .errors import CorpusUnavailable
from .pipeline import PuzzlePipeline
from .records import CONTENT_TYPES, ENDURANCE, LOGIC, RIDDLE

TOTAL_LOGIC_PAGES = 25
TOTAL_ENDURANCE_QUESTIONS = 50
DEFAULT_TIME_MODE = 60


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _pipeline() -> PuzzlePipeline:
    return current_app.extensions["puzzles"]


def _int_arg(name: str, default: int, lo: int = 1, hi: Optional[int] = None) -> int:
    try:
        value = int(request.args.get(name, default))
    except (TypeError, ValueError):
        value = default
    value = max(lo, value)
    return min(hi, value) if hi is not None else value


def _abort_json(status: int, message: str):
    resp = jsonify({"success": False, "message": message})
    resp.status_code = status
    return resp


def _serve(content_type: str, slot: Optional[str] = None, extras: Optional[Dict[str, Any]] = None):
    theme = (request.args.get("theme") or "").strip() or None
    try:
        result, cached = _pipeline().serve(content_type, theme_hint=theme, slot=slot, extras=extras)
    except CorpusUnavailable as e:
        current_app.logger.error("[puzzles] no %s content available: %s", content_type, e)
        return _abort_json(503, "Puzzle content is temporarily unavailable")
    return jsonify(result.to_envelope(cached=cached))


def init_routes(bp: Blueprint):
    """Attach all route handlers to the provided blueprint."""

    @bp.route("/riddles/generate/ai", methods=["GET"])
    def generate_riddle():
        return _serve(RIDDLE)

    @bp.route("/logic/generate", methods=["GET"])
    def generate_logic():
        page = _int_arg("page", 1, hi=TOTAL_LOGIC_PAGES)
        return _serve(LOGIC, slot=f"p{page}", extras={"page": page, "totalPages": TOTAL_LOGIC_PAGES})

    @bp.route("/endurance/generate", methods=["GET", "POST"])
    def generate_endurance():
        time_mode = _int_arg("time", DEFAULT_TIME_MODE)
        number = _int_arg("q", 1, hi=TOTAL_ENDURANCE_QUESTIONS)
        return _serve(ENDURANCE, slot=f"q{number}",
                      extras={"time_mode": time_mode, "question_number": number})

    @bp.route("/puzzles/cache/invalidate", methods=["POST"])
    def invalidate_cache():
        body = request.get_json(silent=True) or {}
        token = request.headers.get("X-Admin-Token") or request.args.get("token") or body.get("token")
        expected = current_app.config.get("PUZZLES_ADMIN_TOKEN")
        if not expected or token != expected:
            return jsonify({"success": False, "message": "forbidden"}), 403

        content_type = (body.get("type") or request.args.get("type") or "").lower()
        if content_type not in CONTENT_TYPES:
            return _abort_json(400, f"type must be one of {', '.join(CONTENT_TYPES)}")
        slot = body.get("slot") or request.args.get("slot") or None

        pipeline = _pipeline()
        key = pipeline.cache.key_for(content_type, slot)
        removed = pipeline.cache.invalidate(key)
        current_app.logger.info("[puzzles] admin invalidate %s removed=%s", key, removed)
        return jsonify({"success": True, "key": key, "invalidated": removed})

    @bp.route("/puzzles/stats", methods=["GET"])
    def stats():
        store = _pipeline().store
        return jsonify({"success": True, "count": store.count(), "by_source": store.group_count_by_source()})

    return bp
