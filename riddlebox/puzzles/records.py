# riddlebox/puzzles/records.py
"""
Record types shared by every pipeline stage, plus answer normalization.
"""

from __future__ import annotations

import re
import datetime as dt
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

# content types served by the API
RIDDLE = "riddle"
LOGIC = "logic"
ENDURANCE = "endurance"
CONTENT_TYPES = (RIDDLE, LOGIC, ENDURANCE)

# provenance
SOURCE_GENERATED = "generated"
SOURCE_FALLBACK_CURATED = "fallback-curated"
SOURCE_FALLBACK_SYSTEM = "fallback-system"
SOURCES = (SOURCE_GENERATED, SOURCE_FALLBACK_CURATED, SOURCE_FALLBACK_SYSTEM)

MIN_ANSWER_LEN = 2
QUESTION_KEY_LEN = 60

# letters are [^\W\d_]; everything else at the edges goes
_EDGE_NON_LETTERS = re.compile(r"^[\W\d_]+|[\W\d_]+$", re.UNICODE)
_EDGE_NON_WORD = re.compile(r"^[\W_]+|[\W_]+$", re.UNICODE)
_WS = re.compile(r"\s+")


def normalize_answer(text: Any) -> str:
    """Lowercase, trim, and strip non-letter characters at both ends."""
    if text is None:
        return ""
    s = str(text).strip().lower()
    return _EDGE_NON_LETTERS.sub("", s)


def question_key(question: Any) -> str:
    """Dedupe key for questions: lowercased, whitespace-collapsed, first 60 chars."""
    s = _WS.sub(" ", str(question or "").strip().lower())
    s = _EDGE_NON_WORD.sub("", s)
    return s[:QUESTION_KEY_LEN].strip()


def answer_key_for(variant: str, answer: str, question: str) -> str:
    # option letters repeat constantly, so logic puzzles dedupe on the question
    if variant == LOGIC:
        return question_key(question)
    return normalize_answer(answer)


def ensure_question_mark(question: str) -> str:
    q = (question or "").strip()
    q = re.sub(r"[\s.!?]+$", "", q)
    return f"{q}?" if q else ""


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


@dataclass(frozen=True)
class PuzzleRecord:
    question: str
    answer: str
    hint: str
    explanation: str
    type: str
    theme: str
    source: str
    variant: str = ""
    options: Tuple[Tuple[str, str], ...] = ()
    created_at: dt.datetime = field(default_factory=utcnow)
    id: Optional[int] = None

    def __post_init__(self):
        if not self.variant:
            object.__setattr__(self, "variant", self.type)

    @property
    def answer_key(self) -> str:
        return answer_key_for(self.variant, self.answer, self.question)

    def with_id(self, record_id: Optional[int]) -> "PuzzleRecord":
        return replace(self, id=record_id)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "id": self.id,
            "question": self.question,
            "hint": self.hint,
            "answer": self.answer,
            "explanation": self.explanation,
            "type": self.type,
            "variant": self.variant,
            "theme": self.theme,
            "source": self.source,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if self.options:
            d["options"] = [{"label": label, "text": text} for label, text in self.options]
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PuzzleRecord":
        created = d.get("createdAt")
        if isinstance(created, str):
            created = dt.datetime.fromisoformat(created)
        options = tuple((o["label"], o["text"]) for o in (d.get("options") or []))
        return cls(
            id=d.get("id"),
            question=d["question"],
            answer=d["answer"],
            hint=d.get("hint") or "",
            explanation=d.get("explanation") or "",
            type=d["type"],
            variant=d.get("variant") or d["type"],
            theme=d.get("theme") or "",
            source=d["source"],
            options=options,
            created_at=created or utcnow(),
        )


@dataclass(frozen=True)
class PuzzleResult:
    """What the pipeline serves (and what the daily cache holds)."""

    record: PuzzleRecord
    ai_generated: bool
    fallback: bool
    unique: bool
    theme: str
    message: str
    reason: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_envelope(self, cached: bool = False) -> Dict[str, Any]:
        data = self.record.to_dict()
        data.update(self.extras)
        return {
            "success": True,
            "ai_generated": self.ai_generated,
            "fallback": self.fallback,
            "cached": cached,
            "unique": self.unique,
            "message": self.message,
            "theme": self.theme,
            "data": data,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "record": self.record.to_dict(),
            "ai_generated": self.ai_generated,
            "fallback": self.fallback,
            "unique": self.unique,
            "theme": self.theme,
            "message": self.message,
            "reason": self.reason,
            "extras": dict(self.extras),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "PuzzleResult":
        return cls(
            record=PuzzleRecord.from_dict(d["record"]),
            ai_generated=bool(d.get("ai_generated")),
            fallback=bool(d.get("fallback")),
            unique=bool(d.get("unique", True)),
            theme=d.get("theme") or "",
            message=d.get("message") or "",
            reason=d.get("reason"),
            extras=dict(d.get("extras") or {}),
        )
