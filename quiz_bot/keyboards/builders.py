from typing import Optional, Union

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup, ReplyKeyboardRemove


def build_reply_keyboard(
    rows: Optional[list[list[str]]],
) -> Optional[Union[ReplyKeyboardMarkup, ReplyKeyboardRemove]]:
    """
    Build a reply keyboard from rows of labels.

    Returns:
        None to keep the current keyboard, ReplyKeyboardRemove for an empty
        list, otherwise a ReplyKeyboardMarkup with one button per label.
    """
    if rows is None:
        return None
    if not rows:
        return ReplyKeyboardRemove()
    return ReplyKeyboardMarkup(
        keyboard=[[KeyboardButton(text=label) for label in row] for row in rows],
        resize_keyboard=True,
    )
