"""
Parsing of raw question records.

Both the bundled question file and user submissions go through
`normalize_record`. Nothing here raises on bad input: callers get either a
`Parsed` result or an `Empty` one carrying the reason.
"""
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from quiz_bot.models import OPTION_LETTERS, Question

# Header rows that spreadsheet exports leave in the question lists
HEADER_TOKENS = ("№", "Savol", "To`g`ri javob")
HEADER_MARKERS = ("TEST MATERIALLARI",)

MIN_QUESTION_LENGTH = 10

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.DOTALL)


@dataclass(frozen=True)
class Parsed:
    questions: tuple[Question, ...]


@dataclass(frozen=True)
class Empty:
    reason: str


ParseResult = Union[Parsed, Empty]


def _option_text(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _labelled_values(raw_options: Any) -> Optional[list[tuple[Optional[str], Any]]]:
    """Pair each raw option with the letter it was given, or None for a bad shape."""
    if isinstance(raw_options, list):
        values = raw_options
    elif isinstance(raw_options, dict):
        by_letter = {str(key).strip().upper(): value for key, value in raw_options.items()}
        if any(letter in by_letter for letter in OPTION_LETTERS):
            return [(letter, by_letter.get(letter)) for letter in OPTION_LETTERS]
        values = list(raw_options.values())
    else:
        return None

    letters = list(OPTION_LETTERS) + [None] * max(0, len(values) - len(OPTION_LETTERS))
    return list(zip(letters, values))


def _collect_options(raw_options: Any, correct: str) -> Optional[tuple[list[str], str]]:
    """
    Return usable option texts in display order and the correct letter for them.

    Blank options are dropped, so the correct letter is moved to wherever its
    option ends up. None when the shape is bad or the correct option is unusable.
    """
    labelled = _labelled_values(raw_options)
    if labelled is None:
        return None

    options: list[str] = []
    new_correct = None
    for letter, value in labelled:
        text = _option_text(value)
        if text is None or len(options) == len(OPTION_LETTERS):
            continue
        if letter == correct:
            new_correct = OPTION_LETTERS[len(options)]
        options.append(text)

    if new_correct is None:
        return None
    return options, new_correct


def _is_header(text: str) -> bool:
    return text in HEADER_TOKENS or any(marker in text for marker in HEADER_MARKERS)


def _first_present(raw: dict, *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def normalize_record(
    raw: Any,
    number: int,
    min_length: int = 1,
    skip_headers: bool = False,
) -> Optional[Question]:
    """
    Turn one raw record into a Question numbered `number`.

    Returns None when the record is not a usable question.
    """
    if not isinstance(raw, dict):
        return None

    text = _first_present(raw, "question", "Savol")
    if not isinstance(text, str):
        return None
    text = text.strip()
    if len(text) < min_length:
        return None
    if skip_headers and _is_header(text):
        return None

    correct = _first_present(raw, "correct", "To_gri_javob")
    if correct is None:
        correct = "A"
    correct = str(correct).strip().upper()

    collected = _collect_options(raw.get("options"), correct)
    if collected is None:
        return None
    options, correct = collected
    if len(options) < 2:
        return None

    return Question(id=number, text=text, options=tuple(options), correct=correct)


def normalize_records(
    records: Iterable[Any], min_length: int = 1, skip_headers: bool = False
) -> tuple[Question, ...]:
    """Normalize a list of records, dropping bad ones and numbering survivors 1..N."""
    questions: list[Question] = []
    for index, raw in enumerate(records):
        question = normalize_record(raw, len(questions) + 1, min_length, skip_headers)
        if question is None:
            logging.debug(f"Skipping unusable question record at index {index}")
            continue
        questions.append(question)
    return tuple(questions)


def _strip_fence(text: str) -> str:
    match = _FENCE_RE.match(text.strip())
    return match.group(1) if match else text


def parse_submission(raw_text: str) -> ParseResult:
    """Parse a user-submitted JSON array of questions."""
    try:
        data = json.loads(_strip_fence(raw_text))
    except (TypeError, ValueError) as e:
        logging.debug(f"Submission is not valid JSON: {e}")
        return Empty("not valid JSON")

    if not isinstance(data, list):
        return Empty("expected a JSON array of questions")

    questions = normalize_records(data)
    if not questions:
        return Empty("no usable questions")
    return Parsed(questions)
