from quiz_bot.keyboards.builders import build_reply_keyboard

__all__ = ["build_reply_keyboard"]
