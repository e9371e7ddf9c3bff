import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

ANSWER_KEY_MARKERS = ("answer key", "answers:", "correct answers")

FIXED_TABLE_FILENAME_TOKEN = "fba429"
FIXED_TABLE_PHRASES = ("akintunde", "fba 429")
FIXED_TABLE_Q_LINE_THRESHOLD = 10

# "12. C", "12) c", "12 - C", "12 C"
_KEY_PAIR_RE = re.compile(
    r"(?<!\d)(\d{1,3})\s*(?:[:.\-)]\s*([A-Ea-e])|\s+([A-E]))\b"
)
_INLINE_Q_START_RE = re.compile(r"^\d+\)\s*Q\.", re.IGNORECASE)
_INLINE_OPTION_RE = re.compile(r"^\(?[A-Ea-e][.)]\)?\s*\S.*\s+[A-E]\s*$")
_Q_DOT_LINE_RE = re.compile(r"^Q\.")


@dataclass(frozen=True)
class Dialect:
    answer_key_start: Optional[int] = None
    answer_key: Dict[int, str] = field(default_factory=dict)
    inline_answers: bool = False
    fixed_table: bool = False
    html_bold: bool = False


def find_answer_key_start(lines: List[str]) -> Optional[int]:
    # The last marker wins: instructions near the top often mention the key.
    for i in range(len(lines) - 1, -1, -1):
        lowered = lines[i].lower()
        if any(marker in lowered for marker in ANSWER_KEY_MARKERS):
            return i
    return None


def parse_answer_key(lines: List[str], start: int) -> Dict[int, str]:
    answers: Dict[int, str] = {}
    # the marker line itself may carry pairs: "Answer Key: 1. C 2. A"
    for i, line in enumerate(lines[start:]):
        if i == 0:
            line = re.split(r"(?i)answer key|answers:|correct answers", line)[-1]
        for match in _KEY_PAIR_RE.finditer(line):
            letter = match.group(2) or match.group(3)
            answers[int(match.group(1))] = letter.upper()
    return answers


def has_inline_answers(lines: List[str]) -> bool:
    return any(_INLINE_Q_START_RE.match(l) or _INLINE_OPTION_RE.match(l) for l in lines)


def is_fixed_table_source(lines: List[str], filename: str = "") -> bool:
    if FIXED_TABLE_FILENAME_TOKEN in (filename or "").lower().replace(" ", ""):
        return True
    lowered = "\n".join(lines).lower()
    if any(phrase in lowered for phrase in FIXED_TABLE_PHRASES):
        return True
    q_lines = sum(1 for l in lines if _Q_DOT_LINE_RE.match(l))
    return q_lines > FIXED_TABLE_Q_LINE_THRESHOLD


def detect_dialect(lines: List[str], filename: str = "", html: bool = False) -> Dialect:
    start = find_answer_key_start(lines)
    answer_key = parse_answer_key(lines, start) if start is not None else {}

    dialect = Dialect(
        answer_key_start=start,
        answer_key=answer_key,
        inline_answers=has_inline_answers(lines),
        fixed_table=is_fixed_table_source(lines, filename),
        html_bold=html,
    )
    logger.debug(
        "Dialect: key_start=%s key_entries=%d inline=%s fixed_table=%s html=%s",
        dialect.answer_key_start, len(dialect.answer_key),
        dialect.inline_answers, dialect.fixed_table, dialect.html_bold,
    )
    return dialect
