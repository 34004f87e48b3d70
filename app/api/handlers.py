"""
API handlers: run the chat pipeline and map results/errors to (status, body).

Responsibility: Shared by the FastAPI routes and the serverless adapter so both
surfaces behave identically. Free of FastAPI types.
"""

import logging
from typing import Any

from app.agent.graph import run_pipeline
from app.core.errors import user_facing_error_message

logger = logging.getLogger(__name__)


def handle_chat(message: Any) -> tuple[int, dict[str, Any]]:
    """
    Answer one chat message. Returns (status_code, body).

    400 when message is missing or blank; 500 with guidance text when the pipeline fails.
    """
    if not isinstance(message, str) or not message.strip():
        return 400, {"error": "Message is required"}
    try:
        result = run_pipeline(message)
    except Exception as e:
        logger.exception("[api:handle_chat] pipeline failed")
        return 500, {"error": "Failed to process request", "response": user_facing_error_message(e)}
    return 200, {"response": result["answer"]}


def handle_invalid_request(errors: list[dict[str, Any]]) -> tuple[int, dict[str, Any]]:
    """
    Map request-body validation errors to the same 400 bodies the serverless adapter returns.
    """
    if any(err.get("type") == "json_invalid" for err in errors):
        return 400, {"error": "Invalid JSON body"}
    return 400, {"error": "Message is required"}
