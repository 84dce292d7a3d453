from dataclasses import dataclass, field
from typing import Optional

from quiz_bot.states import Phase

OPTION_LETTERS = ("A", "B", "C", "D")


@dataclass(frozen=True)
class Question:
    """A single multiple-choice question."""

    id: int
    text: str
    options: tuple[str, ...]
    correct: str = "A"

    @property
    def correct_index(self) -> int:
        return OPTION_LETTERS.index(self.correct)

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_index]


@dataclass(frozen=True)
class Session:
    """
    Per-user quiz state.

    `candidates` is only meaningful while AWAITING_LIMIT, `active` only once
    the limit is confirmed (READY / IN_PROGRESS).
    """

    phase: Phase = Phase.AWAITING_SET_OR_COMMAND
    set_name: Optional[str] = None
    candidates: tuple[Question, ...] = field(default=(), repr=False)
    active: tuple[Question, ...] = field(default=(), repr=False)
    cursor: int = 0
    score: int = 0
    limit: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0 <= self.score <= self.cursor:
            raise ValueError(f"score {self.score} out of range for cursor {self.cursor}")
        if self.active and self.cursor > len(self.active):
            raise ValueError(f"cursor {self.cursor} past {len(self.active)} questions")
        if self.phase in (Phase.READY, Phase.IN_PROGRESS) and not self.active:
            raise ValueError(f"{self.phase.value} session without active questions")

    @property
    def total(self) -> int:
        """Number of questions in this run, as far as it is known."""
        if self.limit is not None:
            return self.limit
        if self.active:
            return len(self.active)
        return len(self.candidates)

    @property
    def current_question(self) -> Optional[Question]:
        if 0 <= self.cursor < len(self.active):
            return self.active[self.cursor]
        return None
