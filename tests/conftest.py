import random
from typing import Optional

import pytest

from quiz_bot.models import Question
from quiz_bot.services.quiz_machine import transition
from quiz_bot.services.quiz_service import QuizService


def make_question(id: int, correct: str = "A", text: Optional[str] = None) -> Question:
    return Question(
        id=id,
        text=text or f"Sample question number {id}?",
        options=("first", "second", "third", "fourth"),
        correct=correct,
    )


@pytest.fixture
def math_questions() -> tuple:
    return (
        make_question(1, "B", "What is 7 multiplied by 8?"),
        make_question(2, "A", "What is the square root of 144?"),
        make_question(3, "C", "How many degrees are in a right angle?"),
    )


@pytest.fixture
def quizzes(math_questions) -> QuizService:
    return QuizService({"Math": math_questions, "History": (make_question(1),)})


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def step(quizzes, rng):
    """Run one message through the state machine with the test question store."""

    def _step(session, text):
        return transition(
            session,
            text,
            quizzes.list_set_names,
            quizzes.get_questions,
            quizzes.parse_user_submission,
            rng=rng,
        )

    return _step
