from enum import Enum


class Phase(str, Enum):
    """Conversation phases of a quiz session. No session at all means the quiz is over."""

    AWAITING_SET_OR_COMMAND = "awaiting_set_or_command"
    AWAITING_CONTENT = "awaiting_content"  # User is sending a JSON question list
    AWAITING_LIMIT = "awaiting_limit"  # User is entering the number of questions
    READY = "ready"  # Limit confirmed, waiting for the start button
    IN_PROGRESS = "in_progress"  # User is answering quiz questions
