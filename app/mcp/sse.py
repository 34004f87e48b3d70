"""
Decoder for JSON-RPC replies delivered as a text event-stream.
"""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "


def parse_sse_response(text: Any) -> Any | None:
    """
    Return the JSON payload of the first "data: " line in an event-stream body.

    Only the first data line is considered. Malformed JSON on that line is logged
    and treated as no payload. Returns None for empty or non-text input.
    """
    if not text or not isinstance(text, str):
        return None
    for line in text.splitlines():
        if not line.startswith(DATA_PREFIX):
            continue
        try:
            return json.loads(line[len(DATA_PREFIX):])
        except json.JSONDecodeError as e:
            logger.error("[sse:parse_sse_response] failed to parse data line: %s", e)
            return None
    return None
