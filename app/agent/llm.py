"""
LLM gateway: chat completions against an OpenAI-compatible endpoint (Cerebras by default).

Errors from the API are not caught here; each call site decides whether to
absorb or propagate them.
"""

import logging
from typing import Any

from openai import OpenAI

from app.core.config import LLM_API_KEY, LLM_API_TIMEOUT, LLM_BASE_URL, LLM_MODEL
from app.core.errors import LLMResponseError

logger = logging.getLogger(__name__)


def get_client() -> OpenAI:
    return OpenAI(api_key=LLM_API_KEY, base_url=LLM_BASE_URL, timeout=LLM_API_TIMEOUT)


def chat_completion(
    messages: list[dict[str, Any]],
    temperature: float,
    max_tokens: int,
    client: OpenAI | None = None,
) -> str:
    """
    Send messages to the chat completions API and return the first choice's text.

    Raises LLMResponseError when the response has no choices; API errors propagate.
    """
    prompt_len = sum(len(m.get("content") or "") for m in messages)
    logger.info(
        "[llm] IN  model=%s messages=%d prompt_len=%d temperature=%s max_tokens=%d",
        LLM_MODEL, len(messages), prompt_len, temperature, max_tokens,
    )
    client = client or get_client()
    response = client.chat.completions.create(
        model=LLM_MODEL,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
    )
    if not response.choices:
        raise LLMResponseError("Invalid response from LLM API: no choices returned")
    out = response.choices[0].message.content or ""
    logger.info("[llm] OUT response_len=%d", len(out))
    logger.debug("[llm] OUT response_full=%r", out)
    return out
