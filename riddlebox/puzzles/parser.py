# riddlebox/puzzles/parser.py
"""
Turn free model text into a candidate puzzle.

Parsing is an ordered chain of pure rules:

    label_pass -> positional_pass -> synthesis_pass

Each rule takes a ParseState and returns a new one. A rule only runs while
the state is still incomplete, so well-labelled output never touches the
heuristics. After the chain, `parse` validates the result and returns either
a Candidate or a ParseFailure carrying whatever was recovered. A question or
an answer is never invented from nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, FrozenSet, Optional, Sequence, Tuple, Union

from .records import (
    LOGIC,
    MIN_ANSWER_LEN,
    RIDDLE,
    SOURCE_GENERATED,
    PuzzleRecord,
    answer_key_for,
    ensure_question_mark,
    normalize_answer,
    question_key,
    utcnow,
)

Options = Tuple[Tuple[str, str], ...]

FIELDS = ("question", "hint", "answer", "explanation")


@dataclass(frozen=True)
class Shape:
    name: str
    default_hint: str
    requires_options: bool = False


RIDDLE_SHAPE = Shape(RIDDLE, "Think carefully!")
LOGIC_SHAPE = Shape(LOGIC, "Think logically!", requires_options=True)
SHAPES = {RIDDLE: RIDDLE_SHAPE, LOGIC: LOGIC_SHAPE}


@dataclass(frozen=True)
class Candidate:
    question: str
    answer: str
    hint: str
    explanation: str
    variant: str
    options: Options = ()

    @property
    def answer_key(self) -> str:
        return answer_key_for(self.variant, self.answer, self.question)

    def to_record(self, content_type: str, theme: str, source: str = SOURCE_GENERATED) -> PuzzleRecord:
        return PuzzleRecord(
            question=self.question,
            answer=self.answer,
            hint=self.hint,
            explanation=self.explanation,
            type=content_type,
            variant=self.variant,
            theme=theme,
            source=source,
            options=self.options,
            created_at=utcnow(),
        )


@dataclass(frozen=True)
class ParseFailure:
    reason: str
    partial: Dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class ParseState:
    lines: Tuple[str, ...]
    fields: Dict[str, str] = field(default_factory=dict)
    options: Options = ()
    consumed: FrozenSet[int] = frozenset()

    def get(self, name: str) -> str:
        return self.fields.get(name) or ""

    def free(self):
        return [(i, line) for i, line in enumerate(self.lines) if i not in self.consumed]

    def partial(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {k: v for k, v in self.fields.items() if v}
        if self.options:
            d["options"] = [{"label": label, "text": text} for label, text in self.options]
        return d


# ---------------------------------------------------------------------
# Text cleanup
# ---------------------------------------------------------------------

_FENCE = re.compile(r"^\s*```.*$")
_HEADING = re.compile(r"^\s*#{1,6}\s*")
_QUOTE = re.compile(r"^\s*>+\s*")
_BULLET = re.compile(r"^\s*(?:[-*•+]|\d{1,2}[.)])\s+")
_DOUBLE_UNDERSCORE = re.compile(r"__(.+?)__")
_SINGLE_UNDERSCORE = re.compile(r"(?<![\w_])_(?!_)(.+?)(?<!_)_(?![\w_])")


def clean_lines(raw: str) -> Tuple[str, ...]:
    """Strip markdown artifacts and return the non-empty lines."""
    text = (raw or "").replace("\r\n", "\n").replace("\r", "\n")
    out = []
    for line in text.split("\n"):
        if _FENCE.match(line):
            continue
        line = line.replace("`", "")
        line = _QUOTE.sub("", line)
        line = _HEADING.sub("", line)
        line = _BULLET.sub("", line)
        line = line.replace("*", "")
        line = _DOUBLE_UNDERSCORE.sub(r"\1", line)
        line = _SINGLE_UNDERSCORE.sub(r"\1", line)
        line = re.sub(r"\s{2,}", " ", line).strip()
        if line:
            out.append(line)
    return tuple(out)


# ---------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------

_OPTION_LINE = re.compile(r"^\(?[A-F][).:]\s*\S")
_OPTION_ITEM = re.compile(r"(?:^|(?<=\s))\(?([A-F])[).:]\s*(.+?)(?=\s+\(?[A-F][).:]\s|$)")


def split_options(text: str) -> Options:
    """'A) 24 B) 32' -> (('A', '24'), ('B', '32'))."""
    found: Dict[str, str] = {}
    for m in _OPTION_ITEM.finditer((text or "").strip()):
        value = m.group(2).strip()
        if value:
            found[m.group(1)] = value
    return tuple(found.items())


def _merge_options(current: Options, more: Options) -> Options:
    merged = dict(current)
    merged.update(dict(more))
    return tuple(merged.items())


# ---------------------------------------------------------------------
# Answer resolution
# ---------------------------------------------------------------------

_LEADING_ARTICLE = re.compile(r"^(?:a|an|the)\s+")
_ANSWER_PREAMBLE = r"(?:the\s+)?(?:answer|solution)\b(?:\s+is)?\s*[:\-–—]?\s*"
_LEFTOVER_LABEL = re.compile(
    rf"^(?:{_ANSWER_PREAMBLE}|[A-Za-z][A-Za-z ]{{0,20}}[:\-–—]\s+)",
    re.IGNORECASE,
)
# "The answer is a piano." / "It's a piano"
_SENTENCE_LEAD = re.compile(rf"^(?:{_ANSWER_PREAMBLE})?(?:it\s+is\s+|it['’]s\s+)?", re.IGNORECASE)
_BARE_WORD = re.compile(r"[A-Za-z]{2,15}")
_BARE_LETTER = re.compile(r"\(?([A-F])[).]?")
_LETTER_PREFIX = re.compile(r"^\(?([A-Fa-f])[).:]")


def resolve_riddle_answer(raw: str) -> str:
    s = _SENTENCE_LEAD.sub("", normalize_answer(raw), count=1)
    s = _LEADING_ARTICLE.sub("", s)
    words = s.split()
    return normalize_answer(words[0]) if words else ""


def resolve_logic_answer(raw: str, options: Options) -> str:
    labels = {label for label, _ in options}
    s = (raw or "").strip()
    m = re.fullmatch(r"\(?([A-Fa-f])\)?\.?", s) or _LETTER_PREFIX.match(s)
    if m and m.group(1).upper() in labels:
        return m.group(1).lower()
    wanted = question_key(s)
    if wanted:
        for label, text in options:
            if question_key(text) == wanted:
                return label.lower()
    return ""


def resolve_answer(raw: str, shape: Shape, options: Options) -> str:
    if shape.requires_options:
        return resolve_logic_answer(raw, options)
    return resolve_riddle_answer(raw)


def bare_answer(line: str, shape: Shape) -> str:
    s = _LEFTOVER_LABEL.sub("", line or "").strip()
    if shape.requires_options:
        m = _BARE_LETTER.fullmatch(s.rstrip(".!")) or _LETTER_PREFIX.match(s)
        return m.group(1).upper() if m else ""
    s = re.sub(r"^[\W\d_]+|[\W\d_]+$", "", s)
    return s if _BARE_WORD.fullmatch(s) else ""


# ---------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------

_LABEL = re.compile(
    r"^(riddle|question|puzzle|hint|clue|answer|options|choices|explanation)\s*(?:#?\d+)?\s*[:：]\s*(.*)$",
    re.IGNORECASE,
)
_ALIASES = {
    "riddle": "question",
    "question": "question",
    "puzzle": "question",
    "hint": "hint",
    "clue": "hint",
    "answer": "answer",
    "options": "options",
    "choices": "options",
    "explanation": "explanation",
}


def label_pass(state: ParseState, shape: Shape) -> ParseState:
    fields: Dict[str, str] = dict(state.fields)
    options: Options = state.options
    consumed = set(state.consumed)
    pending: Optional[str] = None

    for i, line in enumerate(state.lines):
        m = _LABEL.match(line)
        if m:
            name = _ALIASES[m.group(1).lower()]
            value = m.group(2).strip()
            consumed.add(i)
            if name == "options":
                # last OPTIONS label wins; following option lines belong to it
                options = split_options(value)
                pending = "options"
            elif value:
                fields[name] = value
                pending = None
            else:
                pending = name
            continue

        if pending == "options" and _OPTION_LINE.match(line):
            options = _merge_options(options, split_options(line))
            consumed.add(i)
            continue
        if pending and pending != "options":
            fields[pending] = line
            consumed.add(i)
        pending = None

    return replace(state, fields=fields, options=options, consumed=frozenset(consumed))


def positional_pass(state: ParseState, shape: Shape) -> ParseState:
    fields: Dict[str, str] = dict(state.fields)
    options = state.options
    consumed = set(state.consumed)
    lines = state.lines

    def free():
        return [(i, line) for i, line in enumerate(lines) if i not in consumed]

    if shape.requires_options and not options:
        for i, line in free():
            if _OPTION_LINE.match(line):
                options = _merge_options(options, split_options(line))
                consumed.add(i)

    if not fields.get("question"):
        pick = None
        for i, line in free():
            if "?" in line:
                pick = i
                break
        if pick is None and free():
            pick = free()[0][0]
        if pick is not None:
            fields["question"] = lines[pick]
            consumed.add(pick)

    if not fields.get("answer"):
        for i, line in free():
            word = bare_answer(line, shape)
            if word:
                fields["answer"] = word
                consumed.add(i)
                break

    if not fields.get("hint") and len(lines) > 1 and 1 not in consumed and len(lines[1]) < 50:
        fields["hint"] = lines[1]
        consumed.add(1)

    last = len(lines) - 1
    if not fields.get("explanation") and last > 0 and last not in consumed and len(lines[last]) > 20:
        fields["explanation"] = lines[last]
        consumed.add(last)

    return replace(state, fields=fields, options=options, consumed=frozenset(consumed))


def synthesis_pass(state: ParseState, shape: Shape) -> ParseState:
    fields: Dict[str, str] = dict(state.fields)

    raw_answer = fields.get("answer") or ""
    if not fields.get("explanation") and raw_answer:
        shown = resolve_answer(raw_answer, shape, state.options) or normalize_answer(raw_answer)
        if shape.requires_options:
            shown = dict(state.options).get(shown.upper(), shown)
        if shown:
            fields["explanation"] = f"The answer '{shown}' fits the description."

    if not fields.get("hint"):
        fields["hint"] = shape.default_hint

    if fields.get("question"):
        fields["question"] = ensure_question_mark(fields["question"])

    return replace(state, fields=fields)


Rule = Callable[[ParseState, Shape], ParseState]
DEFAULT_RULES: Tuple[Rule, ...] = (label_pass, positional_pass, synthesis_pass)


def is_complete(state: ParseState, shape: Shape) -> bool:
    if any(not state.get(name) for name in FIELDS):
        return False
    if shape.requires_options and not state.options:
        return False
    q = state.get("question")
    return q.endswith("?") and not q.endswith("??")


class ResponseParser:
    def __init__(self, rules: Sequence[Rule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def run_rules(self, raw: str, shape: Shape) -> ParseState:
        state = ParseState(lines=clean_lines(raw))
        for rule in self.rules:
            if is_complete(state, shape):
                break
            state = rule(state, shape)
        return state

    def parse(self, raw: str, shape: Union[Shape, str] = RIDDLE_SHAPE) -> Union[Candidate, ParseFailure]:
        if isinstance(shape, str):
            shape = SHAPES[shape]

        state = self.run_rules(raw, shape)
        # a complete label pass skips synthesis, so the mark is fixed up here too
        question = ensure_question_mark(state.get("question"))
        raw_answer = state.get("answer")

        if not state.lines:
            return ParseFailure("empty_text")
        if not question:
            return ParseFailure("missing_question", state.partial())
        if not raw_answer:
            return ParseFailure("missing_answer", state.partial())
        if shape.requires_options and len(state.options) < 2:
            return ParseFailure("missing_options", state.partial())

        answer = resolve_answer(raw_answer, shape, state.options)
        if not answer:
            reason = "answer_not_in_options" if shape.requires_options else "invalid_answer"
            return ParseFailure(reason, state.partial())
        if len(answer_key_for(shape.name, answer, question)) < MIN_ANSWER_LEN:
            return ParseFailure("invalid_answer", state.partial())
        if not shape.requires_options and len(answer) < MIN_ANSWER_LEN:
            return ParseFailure("invalid_answer", state.partial())

        return Candidate(
            question=question,
            answer=answer,
            hint=state.get("hint") or shape.default_hint,
            explanation=state.get("explanation") or f"The answer '{answer}' fits the description.",
            variant=shape.name,
            options=state.options if shape.requires_options else (),
        )
