import random

from riddlebox.puzzles.themes import LOGIC_THEMES, RIDDLE_THEMES, ThemeSelector


def test_known_hint_wins():
    selector = ThemeSelector(rng=random.Random(1))
    assert selector.pick("riddle", hint="Music", recent=["music"]) == "music"


def test_unknown_hint_is_ignored():
    selector = ThemeSelector(rng=random.Random(1))
    assert selector.pick("riddle", hint="spaceships") in RIDDLE_THEMES


def test_recent_themes_are_avoided():
    selector = ThemeSelector(rng=random.Random(3))
    recent = ["animal", "object", "nature", "food", "household"]
    for _ in range(20):
        assert selector.pick("riddle", recent=recent) == "music"


def test_every_theme_recent_picks_from_all():
    selector = ThemeSelector(rng=random.Random(5))
    picked = {selector.pick("logic", recent=list(LOGIC_THEMES)) for _ in range(50)}
    assert picked <= set(LOGIC_THEMES)
    assert len(picked) > 1


def test_same_seed_same_sequence():
    a = ThemeSelector(rng=random.Random(42))
    b = ThemeSelector(rng=random.Random(42))
    assert [a.pick("riddle") for _ in range(10)] == [b.pick("riddle") for _ in range(10)]


def test_describe_returns_prompt_phrase():
    selector = ThemeSelector()
    assert selector.describe("riddle", "household") == "a household item"
    assert selector.describe("logic", "unknown") == "unknown"
