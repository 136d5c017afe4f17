# riddlebox/puzzles/models.py
# -*- coding: utf-8 -*-

from __future__ import annotations

import datetime as dt

from riddlebox.extensions import db


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Puzzle(db.Model):
    __tablename__ = "puzzles"
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    content_type = db.Column(db.String(20), index=True, nullable=False)  # riddle|logic|endurance
    variant = db.Column(db.String(20), nullable=False)                   # riddle|logic
    question = db.Column(db.Text, nullable=False)
    hint = db.Column(db.Text, nullable=True)
    answer = db.Column(db.String(120), nullable=False)
    answer_key = db.Column(db.String(120), index=True, nullable=False)   # dedupe key
    explanation = db.Column(db.Text, nullable=True)
    options_json = db.Column(db.JSON, nullable=True)
    theme = db.Column(db.String(60), nullable=True)
    source = db.Column(db.String(30), index=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Puzzle {self.id} {self.content_type}:{self.answer_key}>"


class DailyCacheSlot(db.Model):
    __tablename__ = "daily_cache_slots"
    key = db.Column(db.String(80), primary_key=True)          # e.g. riddle:2024-06-01
    payload = db.Column(db.JSON, nullable=False)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<DailyCacheSlot {self.key}>"
