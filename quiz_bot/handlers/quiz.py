import logging
import random
from typing import Awaitable, Callable, Optional

from aiogram import F, Router
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import Message

from quiz_bot.keyboards import build_reply_keyboard
from quiz_bot.services.quiz_machine import Reply, phase_of, transition
from quiz_bot.services.quiz_service import QuizService
from quiz_bot.services.session_store import SessionStore

router = Router()

# Telegram rejects messages longer than 4096 characters
MAX_MESSAGE_LENGTH = 4000

Sender = Callable[[Reply], Awaitable[None]]


def apply_text(
    user_id: int,
    text: str,
    sessions: SessionStore,
    quizzes: QuizService,
    rng: Optional[random.Random] = None,
) -> list[Reply]:
    """Transition the user's session and store the result. The caller holds the user lock."""
    session = sessions.get(user_id)
    result = transition(
        session,
        text,
        quizzes.list_set_names,
        quizzes.get_questions,
        quizzes.parse_user_submission,
        rng=rng,
    )

    if result.session is None:
        sessions.delete(user_id)
    else:
        sessions.set(user_id, result.session)

    before, after = phase_of(session), phase_of(result.session)
    if before != after:
        logging.info(f"User {user_id}: {before.value} -> {after.value}")
    return list(result.replies)


async def process_text(
    user_id: int,
    text: str,
    sessions: SessionStore,
    quizzes: QuizService,
    rng: Optional[random.Random] = None,
    send: Optional[Sender] = None,
) -> list[Reply]:
    """
    Run one user message through the quiz state machine.

    The replies are delivered through `send` while the user's lock is still
    held, so the next message from the same user waits until they are out.
    """
    text = (text or "").strip()
    if not text:
        return []

    async with sessions.lock(user_id):
        replies = apply_text(user_id, text, sessions, quizzes, rng)
        if send is not None:
            for reply in replies:
                await send(reply)
    return replies


async def send_reply(msg: Message, reply: Reply) -> None:
    """Send one reply, falling back to shortened plain text if Telegram rejects it."""
    keyboard = build_reply_keyboard(reply.keyboard)
    parse_mode = ParseMode.MARKDOWN if reply.markdown else None

    try:
        await msg.answer(reply.text, reply_markup=keyboard, parse_mode=parse_mode)
    except TelegramBadRequest as e:
        logging.warning(f"Error sending reply: {e}")
        await msg.answer(
            reply.text[:MAX_MESSAGE_LENGTH], reply_markup=keyboard, parse_mode=None
        )


@router.message(F.text)
async def handle_text(msg: Message, sessions: SessionStore, quizzes: QuizService) -> None:
    """Handle any text message from the user."""
    logging.debug(f"Message from {msg.chat.id}: {msg.text!r}")

    async def deliver(reply: Reply) -> None:
        try:
            await send_reply(msg, reply)
        except TelegramBadRequest as e:
            logging.warning(f"Failed to send reply to {msg.chat.id}: {e}")

    await process_text(msg.chat.id, msg.text, sessions, quizzes, send=deliver)
