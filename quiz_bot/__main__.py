import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.types import BotCommand, BotCommandScopeDefault

from quiz_bot import config, texts
from quiz_bot.handlers import setup_routers
from quiz_bot.services.quiz_service import QuizService
from quiz_bot.services.session_store import SessionStore


async def on_startup(bot: Bot) -> None:
    await bot.set_my_commands(
        [
            BotCommand(command=command, description=description)
            for command, description in texts.COMMAND_DESCRIPTIONS.items()
        ],
        scope=BotCommandScopeDefault(),
    )
    logging.info("Command menu updated")


def create_dispatcher(quizzes: QuizService, sessions: SessionStore) -> Dispatcher:
    dp = Dispatcher(quizzes=quizzes, sessions=sessions)
    dp.include_router(setup_routers())
    dp.startup.register(on_startup)
    return dp


async def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL)

    if not config.bot_token:
        raise RuntimeError(f"❌ No bot token configured for ENV={config.ENV}")

    quizzes = QuizService.from_file(config.QUIZ_PATH)
    bot = Bot(token=config.bot_token, default=DefaultBotProperties())
    dp = create_dispatcher(quizzes, SessionStore())

    logging.info("Bot polling started")
    await dp.start_polling(bot)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
