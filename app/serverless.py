"""
Serverless adapter: a Lambda/Netlify-style handler over the same chat handler
the FastAPI routes use.

event: {"httpMethod": str, "body": str | None}; returns {"statusCode", "headers", "body"}.
"""

import json
import logging
from typing import Any

from app.api.handlers import handle_chat
from app.core.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}
JSON_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Content-Type": "application/json",
}


def _json_response(status_code: int, payload: dict[str, Any]) -> dict[str, Any]:
    return {"statusCode": status_code, "headers": dict(JSON_HEADERS), "body": json.dumps(payload)}


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    method = (event.get("httpMethod") or "").upper()
    logger.info("[serverless:handler] IN  method=%s", method)
    if method == "OPTIONS":
        return {"statusCode": 200, "headers": dict(PREFLIGHT_HEADERS), "body": ""}
    if method != "POST":
        return _json_response(405, {"error": "Method not allowed"})

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError:
        logger.warning("[serverless:handler] invalid JSON body")
        return _json_response(400, {"error": "Invalid JSON body"})
    message = body.get("message") if isinstance(body, dict) else None

    status_code, payload = handle_chat(message)
    logger.info("[serverless:handler] OUT status=%d", status_code)
    return _json_response(status_code, payload)
