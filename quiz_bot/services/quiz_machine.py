"""
Quiz conversation state machine.

`transition` takes the user's current session (or None) and one incoming
text and returns the next session (or None) with the replies to send. It
performs no I/O; the only outside input is the random generator used to
pick the questions of a run.
"""
import random
import re
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

from quiz_bot import texts
from quiz_bot.models import OPTION_LETTERS, Question, Session
from quiz_bot.states import Phase

SetLister = Callable[[], Sequence[str]]
SetGetter = Callable[[str], Sequence[Question]]
CustomParser = Callable[[str], Sequence[Question]]

_rng = random.Random()

_INTEGER_RE = re.compile(r"[+-]?\d+")

# Keeps a question with its options under the Telegram message size limit
MAX_QUESTION_LENGTH = 3000
MAX_OPTION_LENGTH = 200


@dataclass(frozen=True)
class Reply:
    """
    Outbound message content.

    `keyboard` holds rows of suggested reply labels: None keeps whatever the
    user currently sees, an empty list removes it.
    """

    text: str
    keyboard: Optional[list[list[str]]] = None
    markdown: bool = False


@dataclass(frozen=True)
class Transition:
    session: Optional[Session]
    replies: tuple[Reply, ...] = ()


def phase_of(session: Optional[Session]) -> Phase:
    return session.phase if session is not None else Phase.AWAITING_SET_OR_COMMAND


def percent(score: int, total: int) -> int:
    """Percentage rounded half up."""
    if total <= 0:
        return 0
    return (score * 200 + total) // (2 * total)


def format_question(question: Question, number: int, total: int) -> str:
    text = question.text
    if len(text) > MAX_QUESTION_LENGTH:
        text = text[: MAX_QUESTION_LENGTH - 1] + "…"
    options = "\n".join(
        texts.OPTION.format(letter=letter, text=option[:MAX_OPTION_LENGTH])
        for letter, option in zip(OPTION_LETTERS, question.options)
    )
    return texts.QUESTION.format(number=number, total=total, text=text, options=options)


def question_reply(session: Session) -> Reply:
    """Reply showing the question at the session cursor."""
    question = session.current_question
    return Reply(
        format_question(question, session.cursor + 1, len(session.active)),
        keyboard=[list(row) for row in texts.ANSWER_ROWS],
    )


def shuffled_subset(
    questions: Sequence[Question], limit: int, rng: random.Random
) -> tuple[Question, ...]:
    """Pick `limit` questions without replacement, in random order."""
    pool = list(questions)
    rng.shuffle(pool)
    return tuple(pool[:limit])


def parse_limit(text: str) -> Optional[int]:
    text = text.strip()
    if not _INTEGER_RE.fullmatch(text):
        return None
    return int(text)


def _start(list_sets: SetLister) -> Transition:
    keyboard = [[name] for name in list_sets()]
    keyboard.append([texts.NEW_TEST_BUTTON])
    return Transition(None, (Reply(texts.GREETING, keyboard=keyboard),))


def _new_test() -> Transition:
    return Transition(
        Session(phase=Phase.AWAITING_CONTENT),
        (Reply(texts.SUBMISSION_FORMAT, keyboard=[], markdown=True),),
    )


def _score(session: Optional[Session]) -> Transition:
    if session is None:
        return Transition(None, (Reply(texts.NO_ACTIVE_TEST),))
    report = texts.SCORE_REPORT.format(
        correct=session.score,
        wrong=session.cursor - session.score,
        answered=session.cursor,
        total=session.total,
    )
    return Transition(session, (Reply(report),))


def _accept_submission(session: Session, text: str, parse_custom: CustomParser) -> Transition:
    questions = tuple(parse_custom(text))
    if not questions:
        return Transition(session, (Reply(texts.SUBMISSION_INVALID),))

    count = len(questions)
    updated = replace(session, phase=Phase.AWAITING_LIMIT, candidates=questions)
    reply = (
        texts.SUBMISSION_ACCEPTED.format(count=count)
        + "\n\n"
        + texts.LIMIT_PROMPT.format(count=count)
    )
    return Transition(updated, (Reply(reply),))


def _accept_limit(session: Session, text: str, rng: random.Random) -> Transition:
    count = len(session.candidates)
    limit = parse_limit(text)
    if limit is None or not 1 <= limit <= count:
        return Transition(session, (Reply(texts.LIMIT_INVALID.format(count=count)),))

    updated = Session(
        phase=Phase.READY,
        set_name=session.set_name,
        active=shuffled_subset(session.candidates, limit, rng),
        limit=limit,
    )
    reply = Reply(texts.READY.format(limit=limit), keyboard=[[texts.START_BUTTON]])
    return Transition(updated, (reply,))


def _begin(session: Session) -> Transition:
    updated = replace(session, phase=Phase.IN_PROGRESS)
    if updated.current_question is None:
        return Transition(updated)
    return Transition(updated, (question_reply(updated),))


def _select_set(name: str, get_questions: SetGetter) -> Transition:
    questions = tuple(get_questions(name))
    if not questions:
        return Transition(None, (Reply(texts.SET_EMPTY.format(name=name)),))

    session = Session(phase=Phase.AWAITING_LIMIT, set_name=name, candidates=questions)
    reply = (
        texts.SET_SELECTED.format(name=name, count=len(questions))
        + "\n\n"
        + texts.LIMIT_PROMPT.format(count=len(questions))
    )
    return Transition(session, (Reply(reply, keyboard=[]),))


def _answer(session: Optional[Session], text: str) -> Transition:
    if session is None or not session.active:
        return Transition(session, (Reply(texts.START_FIRST),))

    question = session.current_question
    if question is None:
        return Transition(session)

    is_correct = text.strip().upper() == question.correct.strip().upper()
    if is_correct:
        feedback = Reply(texts.CORRECT)
    else:
        feedback = Reply(texts.WRONG.format(letter=question.correct))

    updated = replace(
        session,
        phase=Phase.IN_PROGRESS,
        cursor=session.cursor + 1,
        score=session.score + int(is_correct),
    )

    if updated.cursor >= len(updated.active):
        total = len(updated.active)
        summary = texts.FINISHED.format(
            score=updated.score, total=total, percent=percent(updated.score, total)
        )
        return Transition(None, (feedback, Reply(summary, keyboard=[])))

    return Transition(updated, (feedback, question_reply(updated)))


def transition(
    session: Optional[Session],
    text: str,
    list_sets: SetLister,
    get_questions: SetGetter,
    parse_custom: CustomParser,
    rng: Optional[random.Random] = None,
) -> Transition:
    """
    Compute the next session and the replies for one incoming message.

    Commands are matched first, then the rule of the session's phase, then
    set names; anything left over is an answer to the current question.
    """
    rng = rng or _rng

    if text == texts.START:
        return _start(list_sets)
    if text in (texts.NEW_TEST, texts.NEW_TEST_BUTTON):
        return _new_test()
    if text == texts.SCORE:
        return _score(session)

    phase = phase_of(session)
    if phase == Phase.AWAITING_CONTENT:
        return _accept_submission(session, text, parse_custom)
    if phase == Phase.AWAITING_LIMIT:
        return _accept_limit(session, text, rng)

    if text == texts.START_BUTTON and session is not None and session.active:
        return _begin(session)

    if session is None and text in list_sets():
        return _select_set(text, get_questions)

    return _answer(session, text)
