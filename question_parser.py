"""
Line-oriented question parser.

Walks extracted document lines through three states (idle, collecting the
stem, collecting options) and emits one Question per recognised block.
Unrecognised lines are skipped; the loop itself never raises.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple, Union

from answer_resolution import AnswerSignals, Signal, clean_option_text, resolve_answer
from dialects import Dialect, detect_dialect
from extraction import SourceLine, extract_text, text_to_lines
from models import Option, Question

logger = logging.getLogger(__name__)

MAX_OPTIONS = 5
MIN_STEM_LINE_LENGTH = 3
NOISE_WORDS = ("instructions", "section", "part")
METADATA_LABEL_RE = re.compile(r"^(Diff|Skill|Objective|Learning\s+Outcome|AACSB)\s*:", re.IGNORECASE)


class QuestionRule(NamedTuple):
    name: str
    pattern: re.Pattern
    numbered: bool


# First match wins. "N) Q." has to come before "N)", otherwise the "Q." label
# ends up in the stem.
QUESTION_RULES: List[QuestionRule] = [
    QuestionRule("numbered_paren_q", re.compile(r"^(\d+)\)\s*Q\.\s*(.+)", re.IGNORECASE), True),
    QuestionRule("numbered_paren", re.compile(r"^(\d+)\)\s*(.+)"), True),
    QuestionRule("q_dot", re.compile(r"^Q\.\s*(.+)", re.IGNORECASE), False),
    QuestionRule("numbered_dot", re.compile(r"^(\d+)\.(?!\d)\s*(.+)"), True),
    QuestionRule("question_word", re.compile(r"^Question\s*(\d+)\s*[:.)]\s*(.+)", re.IGNORECASE), True),
    QuestionRule("q_number", re.compile(r"^Q(\d+)\s*[:.)]\s*(.+)", re.IGNORECASE), True),
    QuestionRule("q_colon", re.compile(r"^Q:\s*(.+)", re.IGNORECASE), False),
]

OPTION_RULES: List[Tuple[str, re.Pattern]] = [
    ("paren", re.compile(r"^([A-Ea-e])\)\s*(.+)")),
    ("dot", re.compile(r"^([A-Ea-e])\.(?![a-z]\.)\s*(.+)")),
    ("wrapped", re.compile(r"^\(([A-Ea-e])\)\s*(.+)")),
]

ANSWER_LINE_RE = re.compile(r"^(?:Correct\s+)?(?:Answer|Ans)\s*[:.]\s*\(?([A-Ea-e])\)?(?![A-Za-z])", re.IGNORECASE)
STANDALONE_LETTER_RE = re.compile(r"^([A-Ea-e])$")


def normalize_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def is_noise_line(text: str) -> bool:
    lowered = text.lower()
    if any(word in lowered for word in NOISE_WORDS):
        return True
    if METADATA_LABEL_RE.match(text):
        return True
    return len(text.strip()) < MIN_STEM_LINE_LENGTH


def match_question_start(text: str) -> Optional[Tuple[QuestionRule, Optional[int], str]]:
    for rule in QUESTION_RULES:
        m = rule.pattern.match(text)
        if not m:
            continue
        if rule.numbered:
            return rule, int(m.group(1)), m.group(2).strip()
        return rule, None, m.group(1).strip()
    return None


def match_option(text: str) -> Optional[Tuple[str, str, bool]]:
    starred = text.startswith("*")
    body = text.lstrip("*").strip()
    for _, pattern in OPTION_RULES:
        m = pattern.match(body)
        if m:
            return m.group(1).upper(), m.group(2).strip(), starred
    return None


# =============================================================================
# STATES
# =============================================================================

@dataclass
class QuestionDraft:
    id: int
    number: int
    stem_parts: List[str] = field(default_factory=list)
    options: List[Option] = field(default_factory=list)
    signals: AnswerSignals = field(default_factory=AnswerSignals)


class Idle:
    def __repr__(self):
        return "Idle()"


@dataclass
class CollectingStem:
    draft: QuestionDraft


@dataclass
class CollectingOptions:
    draft: QuestionDraft


ParserState = Union[Idle, CollectingStem, CollectingOptions]


class QuestionParser:
    """One-shot parser; build a new instance for every document."""

    def __init__(self, dialect: Dialect):
        self.dialect = dialect
        self.state: ParserState = Idle()
        self.questions: List[Question] = []
        self._counter = 0
        # (matcher, transition) pairs, tried in order
        self._dispatch: List[Tuple[Callable, Callable]] = [
            (self._match_question_start, self._start_question),
            (self._match_option, self._add_option),
            (self._match_answer_line, self._record_answer_line),
            (self._match_standalone_letter, self._record_standalone_letter),
            (self._match_stem_line, self._append_stem),
        ]

    @property
    def draft(self) -> Optional[QuestionDraft]:
        if isinstance(self.state, Idle):
            return None
        return self.state.draft

    def parse(self, lines: Sequence[SourceLine]) -> List[Question]:
        end = self.dialect.answer_key_start
        body = lines if end is None else lines[:end]
        for line in body:
            self.feed(line)
        self.finish()
        return self.questions

    def feed(self, line: SourceLine):
        for matcher, transition in self._dispatch:
            match = matcher(line)
            if match is not None:
                self.state = transition(match, line)
                return

    def finish(self):
        self._finalize()
        self.state = Idle()

    # -------------------------------------------------------------- matchers

    def _match_question_start(self, line: SourceLine):
        return match_question_start(line.text)

    def _match_option(self, line: SourceLine):
        if self.draft is None:
            return None
        return match_option(line.text)

    def _match_answer_line(self, line: SourceLine):
        if self.draft is None:
            return None
        return ANSWER_LINE_RE.match(line.text)

    def _match_standalone_letter(self, line: SourceLine):
        draft = self.draft
        if not self.dialect.inline_answers or draft is None or len(draft.options) != 4:
            return None
        return STANDALONE_LETTER_RE.match(line.text)

    def _match_stem_line(self, line: SourceLine):
        if not isinstance(self.state, CollectingStem) or is_noise_line(line.text):
            return None
        return line.text

    # ----------------------------------------------------------- transitions

    def _start_question(self, match, line: SourceLine) -> ParserState:
        rule, number, text = match
        self._finalize()
        if number is None:
            self._counter += 1
            number = self._counter
        draft = QuestionDraft(id=number, number=number, stem_parts=[text])
        return CollectingStem(draft)

    def _add_option(self, match, line: SourceLine) -> ParserState:
        letter, raw_text, starred = match
        draft = self.draft
        if len(draft.options) >= MAX_OPTIONS:
            return self.state
        # a repeated label is dropped, the first one keeps the letter
        if any(o.letter == letter for o in draft.options):
            logger.debug("Q%s: ignoring repeated option %s", draft.number, letter)
            return self.state

        cleaned = clean_option_text(raw_text, inline_answers=self.dialect.inline_answers)
        if cleaned.marked or starred:
            draft.signals.record(Signal.MARKER, letter)
        if cleaned.trailing_letter:
            draft.signals.record(Signal.TRAILING_LETTER, cleaned.trailing_letter)
        if self.dialect.html_bold and line.bold:
            draft.signals.record(Signal.BOLD, letter)

        draft.options.append(Option(letter, cleaned.text))
        return CollectingOptions(draft)

    def _record_answer_line(self, match, line: SourceLine) -> ParserState:
        draft = self.draft
        draft.signals.record(Signal.ANSWER_LINE, match.group(1))
        return CollectingOptions(draft)

    def _record_standalone_letter(self, match, line: SourceLine) -> ParserState:
        self.draft.signals.record(Signal.STANDALONE_LETTER, match.group(1))
        return self.state

    def _append_stem(self, text: str, line: SourceLine) -> ParserState:
        self.draft.stem_parts.append(text)
        return self.state

    def _finalize(self):
        draft = self.draft
        if draft is None:
            return
        stem = normalize_whitespace(" ".join(draft.stem_parts))
        if not stem or not draft.options:
            logger.debug("Dropping question %s: no stem or no options", draft.number)
            return

        letters = [o.letter for o in draft.options]
        correct = resolve_answer(draft.signals, letters, draft.number, stem, self.dialect)
        self.questions.append(Question(
            id=draft.id,
            question_number=draft.number,
            text=stem,
            options=draft.options,
            correct_answer=correct,
        ))


# =============================================================================
# ENTRY POINTS
# =============================================================================

def parse_lines(
    lines: Sequence[Union[SourceLine, str]],
    dialect: Optional[Dialect] = None,
    filename: str = "",
) -> List[Question]:
    source = []
    for line in lines:
        if not isinstance(line, SourceLine):
            line = SourceLine(str(line).strip())
        if line.text:
            source.append(line)

    if dialect is None:
        dialect = detect_dialect([l.text for l in source], filename)
    return QuestionParser(dialect).parse(source)


def parse_text(text: str, filename: str = "") -> List[Question]:
    return parse_lines(text_to_lines(text), filename=filename)


def parse_document(data: bytes, filename: str, media_type: Optional[str] = None) -> List[Question]:
    """Extract and parse a PDF or DOCX upload.

    Raises UnsupportedFileTypeError before reading anything when the type is
    neither PDF nor DOCX, and DocumentDecodeError when the bytes can't be
    decoded. An empty list is a valid result.
    """
    extracted = extract_text(data, filename, media_type)
    dialect = detect_dialect([l.text for l in extracted.lines], filename, html=extracted.html)
    questions = parse_lines(extracted.lines, dialect)
    logger.info("Parsed %d questions from '%s' (%s)", len(questions), filename, extracted.kind)
    return questions
