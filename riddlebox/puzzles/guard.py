# riddlebox/puzzles/guard.py
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Optional

from .records import MIN_ANSWER_LEN, normalize_answer

INVALID_ANSWER = "invalid_answer"
DUPLICATE_ANSWER = "duplicate_answer"


@dataclass(frozen=True)
class Verdict:
    accepted: bool
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.accepted


ACCEPT = Verdict(True)


class UniquenessGuard:
    """
    Accept or reject a candidate against recently stored answer keys.

    Pure: it never touches the store and never mutates the history it is
    given. History is best-effort (a snapshot read), so this suppresses
    near-term repeats rather than enforcing global uniqueness.
    """

    def check(self, candidate, recent_answers: AbstractSet[str]) -> Verdict:
        key = candidate.answer_key
        if len(key) < MIN_ANSWER_LEN:
            return Verdict(False, INVALID_ANSWER)
        recent = {normalize_answer(a) if a else "" for a in recent_answers}
        if key in recent_answers or key in recent:
            return Verdict(False, DUPLICATE_ANSWER)
        return ACCEPT
