"""
Answer composition: the final LLM call, grounded in documentation context when there is any.
"""

import logging

from app.agent.llm import chat_completion
from app.core.config import ANSWER_MAX_TOKENS, ANSWER_TEMPERATURE, PLATFORM_NAME

logger = logging.getLogger(__name__)


def build_system_prompt(context: str | None) -> str:
    """Persona plus either the documentation context or the server-unavailable disclosure."""
    prompt = f"You are a helpful assistant that answers questions about the {PLATFORM_NAME} Platform."
    if context:
        prompt += (
            f"\n\nUse the following context from the official {PLATFORM_NAME} documentation "
            f"to answer the user's question accurately:\n\n{context}\n\n"
            "Base your answer primarily on this documentation."
        )
    else:
        prompt += (
            "\n\nNote: I couldn't access the documentation server at this moment. "
            "Please inform the user that the documentation server is unavailable and you "
            "cannot provide specific information from the docs."
        )
    return prompt


def compose_answer(message: str, context: str | None) -> str:
    """
    Generate the answer to message. Errors from the LLM are logged and re-raised.
    """
    system_prompt = build_system_prompt(context)
    logger.info(
        "[answer:compose_answer] IN  message=%r grounded=%s context_len=%d",
        message, bool(context), len(context or ""),
    )
    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": message},
    ]
    try:
        answer = chat_completion(messages, temperature=ANSWER_TEMPERATURE, max_tokens=ANSWER_MAX_TOKENS)
    except Exception as e:
        logger.error("[answer:compose_answer] LLM call failed: %s", e)
        raise
    logger.info("[answer:compose_answer] OUT answer_len=%d", len(answer))
    return answer
