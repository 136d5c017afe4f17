# riddlebox/puzzles/prompts.py
"""
Prompt text for the generation service.

The parser does not depend on the model honouring these formats; they only
raise the odds of a clean label pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .records import ENDURANCE, LOGIC, RIDDLE

AVOID_SNIPPET_LEN = 60


@dataclass(frozen=True)
class GenerationSettings:
    temperature: float
    max_output_length: int


SETTINGS = {
    (RIDDLE, RIDDLE): GenerationSettings(temperature=0.9, max_output_length=200),
    (LOGIC, LOGIC): GenerationSettings(temperature=0.8, max_output_length=200),
    (ENDURANCE, RIDDLE): GenerationSettings(temperature=1.0, max_output_length=150),
    (ENDURANCE, LOGIC): GenerationSettings(temperature=0.8, max_output_length=200),
}


def settings_for(content_type: str, variant: str) -> GenerationSettings:
    return SETTINGS.get((content_type, variant)) or SETTINGS[(variant, variant)]


def _avoid_block(recent_questions: Iterable[str]) -> str:
    recent = [q for q in recent_questions if q]
    if not recent:
        return ""
    lines = ["Avoid these recent puzzles:"]
    lines += [f"- {q[:AVOID_SNIPPET_LEN]}" for q in recent]
    return "\n".join(lines) + "\n\n"


RIDDLE_FORMAT = (
    "Format EXACTLY:\n"
    "RIDDLE: [the riddle question]\n"
    "HINT: [a helpful hint]\n"
    "ANSWER: [one word only]\n"
    "EXPLANATION: [Explain clearly why this is the answer in 1-2 sentences]\n\n"
    "Example:\n"
    "RIDDLE: What has keys but can't open locks?\n"
    "HINT: Think about musical instruments\n"
    "ANSWER: piano\n"
    "EXPLANATION: A piano has keys, but they are musical keys, not keys that open locks.\n"
)

LOGIC_FORMAT = (
    "EXACT FORMAT:\n"
    "QUESTION: [puzzle text]\n"
    "OPTIONS: A) [answer 1] B) [answer 2] C) [answer 3] D) [answer 4]\n"
    "HINT: [thinking hint]\n"
    "ANSWER: [letter]\n"
    "EXPLANATION: [detailed reasoning]\n\n"
    "Example:\n"
    "QUESTION: There are two ducks in front of a duck, two ducks behind a duck and a duck in the middle. "
    "How many ducks are there?\n"
    "OPTIONS: A) 2 B) 3 C) 4 D) 5\n"
    "HINT: Draw the ducks in a line.\n"
    "ANSWER: B\n"
    "EXPLANATION: Three ducks in a line satisfy every statement at once.\n"
)


def riddle_prompt(theme_phrase: str, recent_questions: Iterable[str] = (), endurance: bool = False) -> str:
    opener = (
        "Generate a SIMPLE riddle for an endurance game."
        if endurance else
        "Generate a UNIQUE and SIMPLE riddle."
    )
    return (
        _avoid_block(recent_questions)
        + f"{opener} The answer should be {theme_phrase}.\n"
        "Answer must be ONE WORD only (like: clock, towel, comb, piano, candle).\n"
        "Make it different from the examples above.\n\n"
        "IMPORTANT: Always include EXPLANATION\n"
        + RIDDLE_FORMAT
        + "\nGenerate a unique riddle now:"
    )


def logic_prompt(theme_phrase: str, recent_questions: Iterable[str] = (), page: Optional[int] = None,
                 endurance: bool = False) -> str:
    title = "Generate a SIMPLE logic puzzle for an endurance game." if endurance else "Generate a WORD-BASED LOGIC PUZZLE"
    if page and not endurance:
        title += f" #{page}"
    return (
        _avoid_block(recent_questions)
        + f"{title}\n\n"
        "RULES:\n"
        f"1. Make it about {theme_phrase}\n"
        "2. NO number sequences and NO math calculations\n"
        "3. It must require LOGICAL REASONING\n"
        "4. Exactly four options labeled A, B, C, D\n\n"
        + LOGIC_FORMAT
        + "\nGenerate a new word-based logic puzzle:"
    )


def build_prompt(content_type: str, variant: str, theme_phrase: str,
                 recent_questions: Iterable[str] = (), page: Optional[int] = None) -> str:
    endurance = content_type == ENDURANCE
    if variant == LOGIC:
        return logic_prompt(theme_phrase, recent_questions, page=page, endurance=endurance)
    return riddle_prompt(theme_phrase, recent_questions, endurance=endurance)
