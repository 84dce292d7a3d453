import json
import logging
from pathlib import Path
from typing import Optional, Union

from quiz_bot.models import Question
from quiz_bot.services.parsing import (
    MIN_QUESTION_LENGTH,
    Parsed,
    normalize_records,
    parse_submission,
)


class QuizService:
    """Service for question set operations."""

    def __init__(self, sets: Optional[dict[str, tuple[Question, ...]]] = None) -> None:
        self._sets: dict[str, tuple[Question, ...]] = dict(sets or {})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "QuizService":
        """Load built-in sets from a JSON file. Any failure leaves zero sets."""
        path = Path(path)
        logging.info(f"Loading quiz data from {path}")
        try:
            with path.open(encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logging.error(f"Error loading quiz data: {e}")
            return cls()
        return cls.from_raw(raw)

    @classmethod
    def from_raw(cls, raw) -> "QuizService":
        """Build sets from a decoded document mapping set name to records."""
        if not isinstance(raw, dict):
            logging.error("Quiz data must map set names to question lists")
            return cls()

        sets = {}
        for name, records in raw.items():
            if not isinstance(records, list):
                logging.warning(f"Skipping set {name}: expected a list of questions")
                continue
            sets[name] = normalize_records(
                records, min_length=MIN_QUESTION_LENGTH, skip_headers=True
            )
            logging.info(f"Loaded {len(sets[name])} valid questions for {name}")

        service = cls(sets)
        logging.info(
            f"Quiz data loaded: {len(sets)} sets, {service.total_question_count()} questions"
        )
        return service

    def list_set_names(self) -> list[str]:
        """Get set names in load order."""
        return list(self._sets)

    def get_questions(self, name: str) -> tuple[Question, ...]:
        """Get the questions of a set, empty for unknown names."""
        return self._sets.get(name, ())

    def get_total_questions(self, name: str) -> int:
        return len(self.get_questions(name))

    def total_question_count(self) -> int:
        return sum(len(questions) for questions in self._sets.values())

    @staticmethod
    def parse_user_submission(raw_text: str) -> list[Question]:
        """Parse a user's JSON question list. An empty list means it was unusable."""
        result = parse_submission(raw_text)
        if isinstance(result, Parsed):
            return list(result.questions)
        logging.info(f"Rejected question submission: {result.reason}")
        return []
