# riddlebox/puzzles/__init__.py
# -*- coding: utf-8 -*-
"""
Daily puzzles - Blueprint Factory

Usage (in the app factory):
    from riddlebox.puzzles import create_puzzles_bp, init_pipeline
    app.register_blueprint(create_puzzles_bp(), url_prefix="/api")
    with app.app_context():
        init_pipeline(app)
"""

from __future__ import annotations

import random

from flask import Blueprint, Flask

from .cache import cache_from_config
from .client import client_from_config
from .fallback import FallbackSelector, corpus_from_config
from .guard import UniquenessGuard
from .parser import ResponseParser
from .pipeline import DEFAULT_HISTORY_WINDOW, PuzzlePipeline
from .store import ContentStore
from .themes import ThemeSelector


def create_puzzles_bp() -> Blueprint:
    bp = Blueprint("puzzles", __name__)

    from .routes import init_routes
    init_routes(bp)

    return bp


def build_pipeline(cfg, client=None, cache=None, rng=None) -> PuzzlePipeline:
    """Wire a pipeline from a config mapping. Any piece can be swapped in."""
    if rng is None:
        seed = cfg.get("PUZZLES_RANDOM_SEED")
        rng = random.Random(seed) if seed is not None else random.Random()
    return PuzzlePipeline(
        store=ContentStore(),
        cache=cache or cache_from_config(cfg),
        client=client or client_from_config(cfg),
        parser=ResponseParser(),
        guard=UniquenessGuard(),
        selector=FallbackSelector(corpus_from_config(cfg), rng=rng),
        themes=ThemeSelector(rng=rng),
        rng=rng,
        history_window=cfg.get("RECENT_HISTORY_WINDOW") or DEFAULT_HISTORY_WINDOW,
    )


def init_pipeline(app: Flask) -> PuzzlePipeline:
    pipeline = build_pipeline(app.config)
    app.extensions["puzzles"] = pipeline
    if not pipeline.client.has_credentials:
        app.logger.warning("[puzzles] no %s API key configured; serving curated fallbacks only",
                           pipeline.client.provider)
    return pipeline
