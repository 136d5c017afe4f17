from riddlebox.puzzles.guard import DUPLICATE_ANSWER, INVALID_ANSWER, UniquenessGuard
from riddlebox.puzzles.parser import Candidate
from riddlebox.puzzles.records import question_key

guard = UniquenessGuard()


def _riddle(answer):
    return Candidate(question="What has keys?", answer=answer, hint="music",
                     explanation="keys for music", variant="riddle")


def test_recent_answer_is_rejected_regardless_of_case_and_punctuation():
    verdict = guard.check(_riddle("Piano."), {"piano", "coin"})
    assert not verdict
    assert verdict.reason == DUPLICATE_ANSWER


def test_fresh_answer_is_accepted():
    assert guard.check(_riddle("clock"), {"piano", "coin"})


def test_history_entries_are_normalized_too():
    assert not guard.check(_riddle("coin"), {"Coin!"})


def test_short_answer_is_invalid():
    verdict = guard.check(_riddle("x"), set())
    assert verdict.reason == INVALID_ANSWER


def test_logic_candidates_dedupe_on_question():
    question = "Tom is taller than Sam. Who is shorter?"
    candidate = Candidate(question=question, answer="b", hint="h", explanation="e",
                          variant="logic", options=(("A", "Tom"), ("B", "Sam")))
    assert guard.check(candidate, {"b", "a"})
    assert not guard.check(candidate, {question_key(question)})


def test_history_is_not_mutated():
    recent = {"piano"}
    guard.check(_riddle("clock"), recent)
    assert recent == {"piano"}
