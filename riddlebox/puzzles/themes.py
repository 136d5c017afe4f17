# riddlebox/puzzles/themes.py
from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional

from .records import LOGIC, RIDDLE

# theme -> phrase dropped into the prompt
RIDDLE_THEMES: Dict[str, str] = {
    "animal": "an animal",
    "object": "an everyday object",
    "nature": "something found in nature",
    "food": "a food or drink",
    "household": "a household item",
    "music": "music or a musical instrument",
}

LOGIC_THEMES: Dict[str, str] = {
    "ordering": "people finishing a race or standing in a line",
    "family": "family relationships",
    "patterns": "a pattern of shapes or words",
    "deduction": "who owns which object",
}

THEMES_BY_VARIANT: Dict[str, Dict[str, str]] = {
    RIDDLE: RIDDLE_THEMES,
    LOGIC: LOGIC_THEMES,
}


class ThemeSelector:
    """Pick a content category, steering away from recently used ones."""

    def __init__(self, rng: Optional[random.Random] = None, themes: Optional[Dict[str, Dict[str, str]]] = None):
        self.rng = rng or random.Random()
        self.themes = themes or THEMES_BY_VARIANT

    def themes_for(self, variant: str) -> List[str]:
        return list(self.themes.get(variant) or self.themes[RIDDLE])

    def describe(self, variant: str, theme: str) -> str:
        return (self.themes.get(variant) or {}).get(theme, theme)

    def pick(self, variant: str, hint: Optional[str] = None, recent: Iterable[str] = ()) -> str:
        names = self.themes_for(variant)
        wanted = (hint or "").strip().lower()
        if wanted in names:
            return wanted

        recent_set = {(t or "").lower() for t in recent}
        fresh = [t for t in names if t not in recent_set]
        return self.rng.choice(fresh or names)
