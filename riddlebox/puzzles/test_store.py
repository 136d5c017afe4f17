import datetime as dt

from sqlalchemy import Text
from sqlalchemy.exc import OperationalError

from riddlebox.extensions import db
from riddlebox.puzzles.models import Puzzle
from riddlebox.puzzles.records import PuzzleRecord
from riddlebox.puzzles.store import ContentStore


def _record(answer, content_type="riddle", minutes=0, source="generated", **kw):
    fields = dict(
        question=f"What is a {answer}?",
        answer=answer,
        hint="hint",
        explanation="because",
        type=content_type,
        theme="object",
        source=source,
        created_at=dt.datetime(2024, 6, 1, 12, tzinfo=dt.timezone.utc) + dt.timedelta(minutes=minutes),
    )
    fields.update(kw)
    return PuzzleRecord(**fields)


def test_append_assigns_ids(app):
    store = ContentStore()
    first = store.append(_record("coin"))
    second = store.append(_record("clock", minutes=1))
    assert first and second and second > first
    assert store.count() == 2


def test_recent_answers_window(app):
    store = ContentStore()
    for i, answer in enumerate(["coin", "clock", "needle", "book"]):
        store.append(_record(answer, minutes=i))

    assert store.recent_answers(2) == {"needle", "book"}
    assert store.recent_answers(10) == {"coin", "clock", "needle", "book"}


def test_recent_history_filters(app):
    store = ContentStore()
    store.append(_record("coin"))
    store.append(_record("comb", content_type="endurance", minutes=1, variant="riddle", theme="household"))
    store.append(_record("a", content_type="logic", minutes=2, question="Who is the tallest?",
                         options=(("A", "Tom"), ("B", "Sam"))))

    assert store.recent_answers(10, content_type="riddle") == {"coin"}
    assert store.recent_answers(10, variant="riddle") == {"coin", "comb"}
    assert store.recent_answers(10, variant="logic") == {"who is the tallest"}
    assert store.recent_questions(10, variant="logic") == ["Who is the tallest?"]
    assert store.recent_themes(10, content_type="endurance") == ["household"]


def test_group_count_by_source(app):
    store = ContentStore()
    store.append(_record("coin"))
    store.append(_record("comb", source="fallback-curated"))
    store.append(_record("towel", source="fallback-curated"))
    assert store.group_count_by_source() == {"generated": 1, "fallback-curated": 2}


def test_history_read_failure_degrades_to_empty(app, monkeypatch):
    store = ContentStore()

    def boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr(store, "_recent", boom)
    assert store.recent_answers(10) == set()
    assert store.recent_questions(10) == []
    assert store.recent_themes(10) == []


def test_long_hint_is_stored_whole(app):
    assert isinstance(Puzzle.__table__.c.hint.type, Text)

    hint = "Think about what sits in a room full of music. " * 12
    assert len(hint) > 300
    row_id = ContentStore().append(_record("piano", hint=hint))

    assert row_id is not None
    assert db.session.get(Puzzle, row_id).hint == hint
