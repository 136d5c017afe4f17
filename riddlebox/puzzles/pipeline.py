# riddlebox/puzzles/pipeline.py
"""
Content normalization pipeline.

    request -> DailyCache (hit: done)
            -> ThemeSelector -> GenerationClient -> ResponseParser
            -> UniquenessGuard (history from ContentStore)
            -> persist + cache + return

Any failure between the client and the guard drops to FallbackSelector,
which always yields a record unless the corpus itself is unusable
(CorpusUnavailable propagates to the caller).
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from .cache import DailyCache
from .client import GenerationClient
from .errors import GenerationError
from .fallback import FallbackSelector
from .guard import UniquenessGuard
from .parser import Candidate, ResponseParser
from .prompts import build_prompt, settings_for
from .records import (
    CONTENT_TYPES,
    ENDURANCE,
    LOGIC,
    RIDDLE,
    PuzzleRecord,
    PuzzleResult,
)
from .store import ContentStore
from .themes import ThemeSelector

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 10

MESSAGES = {
    RIDDLE: ("AI riddle generated successfully!", "Using fallback riddle"),
    LOGIC: ("AI logic question generated successfully!", "Using fallback logic question"),
    ENDURANCE: ("Endurance question generated", "Endurance question generated"),
}


class PuzzlePipeline:
    def __init__(self, store: ContentStore, cache: DailyCache, client: GenerationClient,
                 parser: ResponseParser, guard: UniquenessGuard, selector: FallbackSelector,
                 themes: ThemeSelector, rng: Optional[random.Random] = None,
                 history_window: int = DEFAULT_HISTORY_WINDOW):
        self.store = store
        self.cache = cache
        self.client = client
        self.parser = parser
        self.guard = guard
        self.selector = selector
        self.themes = themes
        self.rng = rng or random.Random()
        self.history_window = history_window

    def serve(self, content_type: str, theme_hint: Optional[str] = None, slot: Optional[str] = None,
              extras: Optional[Dict[str, Any]] = None) -> Tuple[PuzzleResult, bool]:
        """Return (result, cached) for today's slot, producing it on a miss."""
        if content_type not in CONTENT_TYPES:
            raise ValueError(f"unknown content type: {content_type}")
        key = self.cache.key_for(content_type, slot)
        return self.cache.get_or_compute(key, lambda: self.produce(content_type, theme_hint, extras))

    def variant_for(self, content_type: str) -> str:
        if content_type == ENDURANCE:
            return RIDDLE if self.rng.random() < 0.5 else LOGIC
        return content_type

    def produce(self, content_type: str, theme_hint: Optional[str] = None,
                extras: Optional[Dict[str, Any]] = None) -> PuzzleResult:
        extras = dict(extras or {})
        variant = self.variant_for(content_type)
        if content_type == ENDURANCE:
            extras["type"] = variant

        window = self.history_window
        recent_answers = self.store.recent_answers(window, variant=variant)
        recent_themes = self.store.recent_themes(window, content_type=content_type, variant=variant)
        theme = self.themes.pick(variant, theme_hint, recent_themes)

        candidate, reason = self._attempt(content_type, variant, theme, recent_answers, extras.get("page"))

        ok_message, fallback_message = MESSAGES[content_type]
        if candidate is not None:
            record = candidate.to_record(content_type, theme)
            result_args = dict(ai_generated=True, fallback=False, unique=True, message=ok_message)
        else:
            logger.warning("[puzzles] serving fallback %s (%s, theme=%s)", content_type, reason, theme)
            selection = self.selector.select(theme, recent_answers, content_type=content_type, variant=variant)
            record = selection.record
            result_args = dict(ai_generated=False, fallback=True, unique=selection.unique,
                               message=fallback_message)

        record = record.with_id(self._persist(record))
        return PuzzleResult(record=record, theme=record.theme, reason=reason, extras=extras, **result_args)

    def _attempt(self, content_type, variant, theme, recent_answers, page) -> Tuple[Optional[Candidate], Optional[str]]:
        recent_questions = self.store.recent_questions(self.history_window, variant=variant)
        prompt = build_prompt(content_type, variant, self.themes.describe(variant, theme),
                              recent_questions, page=page)
        settings = settings_for(content_type, variant)
        try:
            raw = self.client.generate(prompt, settings.temperature, settings.max_output_length)
        except GenerationError as exc:
            logger.warning("[puzzles] generation failed: %s", exc)
            return None, exc.reason

        parsed = self.parser.parse(raw, variant)
        if not parsed:
            logger.warning("[puzzles] could not parse %s response: %s", variant, parsed.reason)
            return None, parsed.reason

        verdict = self.guard.check(parsed, recent_answers)
        if not verdict:
            logger.info("[puzzles] rejected generated answer %r: %s", parsed.answer, verdict.reason)
            return None, verdict.reason
        return parsed, None

    def _persist(self, record: PuzzleRecord) -> Optional[int]:
        try:
            return self.store.append(record)
        except SQLAlchemyError:
            # already logged by the store; the record is still served
            return None
