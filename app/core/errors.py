"""
Application errors and their user-facing messages.

Most pipeline failures are absorbed where they happen. Composition failures are
the exception: they reach the API layer, which turns them into a 500 with a
guidance message from user_facing_error_message().
"""

from app.core.config import PLATFORM_NAME

ERROR_PREFIX = "I apologize, but I encountered an error. "


class LLMResponseError(Exception):
    """Raised when the LLM API answers without any usable choice."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def user_facing_error_message(error: BaseException) -> str:
    """Pick guidance text for the caller by matching known substrings in the error."""
    text = str(error)
    if "401" in text:
        return ERROR_PREFIX + f"Please check that your {PLATFORM_NAME} API key is valid."
    if "model" in text:
        return ERROR_PREFIX + "There might be an issue with the model selection."
    return ERROR_PREFIX + "Please try again later or check the server logs for more details."
