# riddlebox/puzzles/store.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from riddlebox.extensions import db

from .models import Puzzle
from .records import PuzzleRecord

logger = logging.getLogger(__name__)


class ContentStore:
    """
    Durable, append-only record of every served puzzle.

    Writes are one add+commit per record. History reads are snapshots and
    degrade to an empty history on failure; losing uniqueness for a request
    is better than failing it.
    """

    def append(self, record: PuzzleRecord) -> int:
        row = Puzzle(
            content_type=record.type,
            variant=record.variant,
            question=record.question,
            hint=record.hint,
            answer=record.answer,
            answer_key=record.answer_key,
            explanation=record.explanation,
            options_json=[{"label": label, "text": text} for label, text in record.options] or None,
            theme=record.theme,
            source=record.source,
            created_at=record.created_at,
        )
        try:
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("[puzzles] failed to persist %s record", record.type)
            raise
        return row.id

    def _recent(self, column, limit: int, content_type: Optional[str], variant: Optional[str]) -> List:
        q = db.session.query(column)
        if content_type:
            q = q.filter(Puzzle.content_type == content_type)
        if variant:
            q = q.filter(Puzzle.variant == variant)
        rows = q.order_by(Puzzle.created_at.desc(), Puzzle.id.desc()).limit(limit).all()
        return [row[0] for row in rows if row[0]]

    def recent_answers(self, limit: int = 10, content_type: Optional[str] = None,
                       variant: Optional[str] = None) -> Set[str]:
        """answer_key of the newest `limit` rows."""
        try:
            return set(self._recent(Puzzle.answer_key, limit, content_type, variant))
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("[puzzles] could not read recent answers")
            return set()

    def recent_questions(self, limit: int = 10, content_type: Optional[str] = None,
                         variant: Optional[str] = None) -> List[str]:
        try:
            return self._recent(Puzzle.question, limit, content_type, variant)
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("[puzzles] could not read recent questions")
            return []

    def recent_themes(self, limit: int = 10, content_type: Optional[str] = None,
                      variant: Optional[str] = None) -> List[str]:
        try:
            return self._recent(Puzzle.theme, limit, content_type, variant)
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("[puzzles] could not read recent themes")
            return []

    def count(self) -> int:
        return db.session.query(func.count(Puzzle.id)).scalar() or 0

    def group_count_by_source(self) -> Dict[str, int]:
        rows = db.session.query(Puzzle.source, func.count(Puzzle.id)).group_by(Puzzle.source).all()
        return {source: n for source, n in rows}
