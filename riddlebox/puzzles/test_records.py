import datetime as dt

from riddlebox.puzzles.records import (
    PuzzleRecord,
    PuzzleResult,
    ensure_question_mark,
    normalize_answer,
    question_key,
)


def test_normalize_answer():
    assert normalize_answer("  Piano. ") == "piano"
    assert normalize_answer("'Candle'!") == "candle"
    assert normalize_answer("42 towels") == "towels"
    assert normalize_answer(None) == ""


def test_question_key_keeps_the_first_sixty_characters():
    q = "  What   has keys but can't open locks? " + "x" * 80
    key = question_key(q)
    assert key.startswith("what has keys but can't open locks? x")
    assert len(key) <= 60


def test_question_mark_is_single():
    assert ensure_question_mark("What has keys.") == "What has keys?"
    assert ensure_question_mark("What has keys?!?") == "What has keys?"
    assert ensure_question_mark("   ") == ""


def test_envelope_merges_extras_into_data():
    record = PuzzleRecord(
        question="Who is the shortest?", answer="c", hint="h", explanation="e",
        type="logic", theme="ordering", source="fallback-curated",
        options=(("A", "Tom"), ("B", "Sam"), ("C", "Lee")),
        created_at=dt.datetime(2024, 6, 1, tzinfo=dt.timezone.utc), id=9,
    )
    result = PuzzleResult(record=record, ai_generated=False, fallback=True, unique=True,
                          theme="ordering", message="Using fallback logic question",
                          extras={"page": 3, "totalPages": 25})

    envelope = result.to_envelope(cached=True)
    assert envelope["cached"] is True
    assert envelope["data"]["page"] == 3
    assert envelope["data"]["options"][2] == {"label": "C", "text": "Lee"}
    assert envelope["data"]["createdAt"] == "2024-06-01T00:00:00+00:00"

    restored = PuzzleResult.from_dict(result.to_dict())
    assert restored == result
