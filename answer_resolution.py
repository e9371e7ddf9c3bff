import logging
import re
from enum import IntEnum
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from dialects import Dialect
from fixed_answer_table import lookup_fixed_answer

logger = logging.getLogger(__name__)


class Signal(IntEnum):
    """Answer sources, lower value wins."""
    MARKER = 1
    TRAILING_LETTER = 2
    ANSWER_LINE = 3
    STANDALONE_LETTER = 4
    BOLD = 5
    ANSWER_KEY = 6
    FIXED_TABLE = 7


_GLYPH_RE = re.compile(r"[✓✔✅★]")
_CORRECT_TAG_RE = re.compile(r"\(\s*correct\s*\)", re.IGNORECASE)
_STAR_RE = re.compile(r"^\*+\s*|\s*\*+$")
_TRAILING_LETTER_RE = re.compile(r"^(.*\S)\s+([A-E])$")


class CleanedOption(NamedTuple):
    text: str
    marked: bool
    trailing_letter: Optional[str]


def clean_option_text(text: str, inline_answers: bool = False) -> CleanedOption:
    """Strip answer markers off an option's text and report what was found."""
    text = (text or "").strip()
    marked = False

    for pattern in (_GLYPH_RE, _CORRECT_TAG_RE, _STAR_RE):
        if pattern.search(text):
            marked = True
            text = pattern.sub("", text).strip()
    text = re.sub(r"\s+", " ", text)

    trailing = None
    if inline_answers:
        m = _TRAILING_LETTER_RE.match(text)
        if m:
            text, trailing = m.group(1).strip(), m.group(2)

    return CleanedOption(text, marked, trailing)


class AnswerSignals:
    """Answer letters seen for one question, grouped by source."""

    def __init__(self):
        self._seen: Dict[Signal, List[str]] = {}

    def record(self, signal: Signal, letter: str):
        self._seen.setdefault(signal, []).append(letter.upper())

    def candidates(self) -> Iterator[Tuple[Signal, str]]:
        for signal in sorted(self._seen):
            letters = self._seen[signal]
            if signal is Signal.BOLD:
                # several bold options means bold is just styling here
                if len(set(letters)) == 1:
                    yield signal, letters[0]
                continue
            yield signal, letters[-1]


def _ranked_candidates(signals, question_number, stem, dialect):
    yield from signals.candidates()
    yield Signal.ANSWER_KEY, dialect.answer_key.get(question_number)
    if dialect.fixed_table:
        yield Signal.FIXED_TABLE, lookup_fixed_answer(stem)


def resolve_answer(
    signals: AnswerSignals,
    letters: List[str],
    question_number: int,
    stem: str,
    dialect: Dialect,
) -> str:
    for signal, letter in _ranked_candidates(signals, question_number, stem, dialect):
        if not letter:
            continue
        if letter in letters:
            logger.debug("Q%s: answer %s from %s", question_number, letter, signal.name)
            return letter
        logger.debug("Q%s: dropping %s answer %s, no such option", question_number, signal.name, letter)
    return ""
