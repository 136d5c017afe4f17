# riddlebox/puzzles/fallback.py
"""
Curated fallback content: the availability floor of the pipeline.

Whatever happens upstream, FallbackSelector returns a well-formed record.
Repeating an answer is an accepted degradation once a theme's pool is
exhausted; failing is not. The only failure is a corpus that cannot be
read at all (CorpusUnavailable).
"""

from __future__ import annotations

import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Any, Dict, Iterable, List, Optional, Tuple

from .corpus import CURATED_PUZZLES
from .errors import CorpusUnavailable
from .parser import resolve_logic_answer, split_options
from .records import (
    LOGIC,
    MIN_ANSWER_LEN,
    RIDDLE,
    SOURCE_FALLBACK_CURATED,
    SOURCE_FALLBACK_SYSTEM,
    PuzzleRecord,
    answer_key_for,
    ensure_question_mark,
    normalize_answer,
    utcnow,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackEntry:
    variant: str
    theme: str
    question: str
    answer: str
    hint: str
    explanation: str
    options: Tuple[Tuple[str, str], ...] = ()

    @property
    def answer_key(self) -> str:
        return answer_key_for(self.variant, self.answer, self.question)

    def to_record(self, content_type: str, source: str) -> PuzzleRecord:
        return PuzzleRecord(
            question=self.question,
            answer=self.answer,
            hint=self.hint,
            explanation=self.explanation,
            type=content_type,
            variant=self.variant,
            theme=self.theme,
            source=source,
            options=self.options,
            created_at=utcnow(),
        )


def entry_from_dict(raw: Dict[str, Any]) -> FallbackEntry:
    """Validate one corpus item. Raises ValueError on anything malformed."""
    if not isinstance(raw, dict):
        raise ValueError("entry is not an object")
    variant = (raw.get("type") or raw.get("variant") or RIDDLE).strip().lower()
    if variant not in (RIDDLE, LOGIC):
        raise ValueError(f"unknown type {variant!r}")

    question = ensure_question_mark(str(raw.get("question") or ""))
    if not question:
        raise ValueError("missing question")

    options: Tuple[Tuple[str, str], ...] = ()
    if variant == LOGIC:
        opts = raw.get("options") or ()
        if isinstance(opts, str):
            options = split_options(opts)
        else:
            options = tuple((str(o["label"]).upper(), str(o["text"])) for o in opts)
        if len(options) < 2:
            raise ValueError("logic entry needs at least two options")
        answer = resolve_logic_answer(str(raw.get("answer") or ""), options)
    else:
        answer = normalize_answer(raw.get("answer"))
        if len(answer) < MIN_ANSWER_LEN:
            answer = ""
    if not answer:
        raise ValueError("missing or invalid answer")

    theme = (raw.get("theme") or "general").strip().lower()
    default_hint = "Think logically!" if variant == LOGIC else "Think carefully!"
    return FallbackEntry(
        variant=variant,
        theme=theme,
        question=question,
        answer=answer,
        hint=(raw.get("hint") or default_hint).strip(),
        explanation=(raw.get("explanation") or f"The answer '{answer}' fits the description.").strip(),
        options=options,
    )


class FallbackCorpus:
    def __init__(self, entries: Iterable[FallbackEntry], source: str = SOURCE_FALLBACK_CURATED,
                 backup: Optional["FallbackCorpus"] = None):
        self.entries: List[FallbackEntry] = list(entries)
        self.source = source
        self.backup = backup
        self.error: Optional[str] = None

    @classmethod
    def unavailable(cls, error: str) -> "FallbackCorpus":
        """An empty corpus that reports why it could not be loaded on every use."""
        corpus = cls(())
        corpus.error = error
        return corpus

    @classmethod
    def builtin(cls, source: str = SOURCE_FALLBACK_CURATED) -> "FallbackCorpus":
        return cls((entry_from_dict(e) for e in CURATED_PUZZLES), source=source)

    @classmethod
    def from_file(cls, path: str) -> "FallbackCorpus":
        """
        Load an operator-supplied JSON corpus (a list of entries, or
        {"puzzles": [...]}). Its entries are curated; the packaged corpus
        stays behind it as the system tier for variants it does not cover.
        """
        try:
            with open(Path(path), "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise CorpusUnavailable(f"fallback corpus unreadable at {path}: {exc}") from exc

        items = data.get("puzzles") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise CorpusUnavailable(f"fallback corpus at {path} is not a list of puzzles")

        entries = []
        for i, raw in enumerate(items):
            try:
                entries.append(entry_from_dict(raw))
            except (ValueError, KeyError, TypeError) as exc:
                raise CorpusUnavailable(f"fallback corpus entry #{i} is invalid: {exc}") from exc

        logger.info("[puzzles] loaded %d fallback puzzles from %s", len(entries), path)
        return cls(entries, source=SOURCE_FALLBACK_CURATED, backup=cls.builtin(source=SOURCE_FALLBACK_SYSTEM))

    def entries_for(self, variant: str) -> List[FallbackEntry]:
        return [e for e in self.entries if e.variant == variant]

    def themes(self, variant: str) -> List[str]:
        return sorted({e.theme for e in self.entries_for(variant)})


@dataclass(frozen=True)
class Selection:
    record: PuzzleRecord
    unique: bool


class FallbackSelector:
    def __init__(self, corpus: FallbackCorpus, rng: Optional[random.Random] = None):
        self.corpus = corpus
        self.rng = rng or random.Random()

    def _pool(self, variant: str) -> Tuple[List[FallbackEntry], str]:
        pool = self.corpus.entries_for(variant)
        if pool:
            return pool, self.corpus.source
        if self.corpus.backup is not None:
            pool = self.corpus.backup.entries_for(variant)
            if pool:
                return pool, self.corpus.backup.source
        raise CorpusUnavailable(self.corpus.error or f"no fallback puzzles available for {variant}")

    def select(self, theme: Optional[str], exclude_answers: AbstractSet[str] = frozenset(),
               content_type: str = RIDDLE, variant: Optional[str] = None) -> Selection:
        variant = variant or content_type
        pool, source = self._pool(variant)

        # 1-2: theme subset, or the whole pool when the theme has nothing
        wanted = (theme or "").strip().lower()
        themed = [e for e in pool if e.theme == wanted] or pool

        # 3-4: prefer answers not seen recently
        excluded = {normalize_answer(a) for a in exclude_answers} | set(exclude_answers)
        fresh = [e for e in themed if e.answer_key not in excluded]
        if fresh:
            pick, unique = self.rng.choice(fresh), True
        else:
            # 5: theme exhausted, repeat rather than fail
            pick, unique = self.rng.choice(themed), False
            logger.info("[puzzles] fallback pool for %s/%s exhausted; repeating an answer", variant, wanted or "any")

        return Selection(record=pick.to_record(content_type, source), unique=unique)


def corpus_from_config(cfg: Dict[str, Any]) -> FallbackCorpus:
    path = (cfg.get("FALLBACK_CORPUS_PATH") or "").strip()
    if not path:
        return FallbackCorpus.builtin()
    try:
        return FallbackCorpus.from_file(path)
    except CorpusUnavailable as exc:
        # keep the app up; every request that needs a fallback reports it
        logger.error("[puzzles] %s", exc)
        return FallbackCorpus.unavailable(str(exc))
