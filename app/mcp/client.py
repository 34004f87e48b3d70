"""
Documentation search over an MCP server (JSON-RPC over streamable HTTP).

Every search runs the full exchange: initialize → tools/list → tools/call("search").
Nothing is kept between searches; a failed call aborts the whole search.
"""

import json
import logging
from typing import Any

import httpx

from app.core.config import (
    MCP_CLIENT_NAME,
    MCP_CLIENT_VERSION,
    MCP_HTTP_TIMEOUT,
    MCP_PROTOCOL_VERSION,
    MCP_SEARCH_TOOL,
    MCP_SERVER_URL,
)
from app.mcp.sse import parse_sse_response

logger = logging.getLogger(__name__)

NO_DOCS_FOUND = "No relevant documentation found for your query."
RESULT_SEPARATOR = "\n\n---\n\n"
SESSION_HEADER = "mcp-session-id"

MCP_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/event-stream",
}

# JSON-RPC ids are per search run: 1 = initialize, 2 = tools/list, 3 = tools/call
INITIALIZE_ID = 1
TOOLS_LIST_ID = 2
TOOLS_CALL_ID = 3


def _rpc_envelope(method: str, params: dict[str, Any], request_id: int) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "method": method, "params": params, "id": request_id}


def _decode(response: httpx.Response) -> Any | None:
    """Decode a JSON-RPC reply sent either as plain JSON or as an event-stream."""
    content_type = response.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            return response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError (body not UTF-8) both land here
            logger.error("[mcp:decode] undecodable JSON body: %s", e)
            return None
    return parse_sse_response(response.text)


def _post(
    client: httpx.Client,
    url: str,
    envelope: dict[str, Any],
    session_id: str | None = None,
) -> httpx.Response:
    headers = dict(MCP_HEADERS)
    if session_id:
        headers[SESSION_HEADER] = session_id
    response = client.post(url, json=envelope, headers=headers)
    response.raise_for_status()
    return response


def extract_text_content(data: Any) -> str:
    """
    Join the textual entries of a tools/call result.

    Returns the no-documentation sentinel when the reply has no content list.
    """
    result = data.get("result") if isinstance(data, dict) else None
    contents = result.get("content") if isinstance(result, dict) else None
    if not isinstance(contents, list):
        return NO_DOCS_FOUND
    texts = [
        item["text"]
        for item in contents
        if isinstance(item, dict) and item.get("type") == "text" and item.get("text")
    ]
    return RESULT_SEPARATOR.join(texts)


def _advertised_tools(data: Any) -> list[str]:
    result = data.get("result") if isinstance(data, dict) else None
    tools = result.get("tools") if isinstance(result, dict) else None
    if not isinstance(tools, list):
        return []
    return [t.get("name", "") for t in tools if isinstance(t, dict)]


def search_docs(
    query: str,
    client: httpx.Client | None = None,
    server_url: str = MCP_SERVER_URL,
) -> str | None:
    """
    Search the documentation server for query.

    Returns the joined text results, NO_DOCS_FOUND when the server answered without
    results, or None when the server could not be reached or returned an error.
    """
    if client is None:
        with httpx.Client(timeout=MCP_HTTP_TIMEOUT) as own_client:
            return search_docs(query, client=own_client, server_url=server_url)

    logger.info("[mcp:search_docs] IN  query=%r server=%s", query, server_url)
    try:
        init_response = _post(
            client,
            server_url,
            _rpc_envelope(
                "initialize",
                {
                    "protocolVersion": MCP_PROTOCOL_VERSION,
                    "capabilities": {},
                    "clientInfo": {"name": MCP_CLIENT_NAME, "version": MCP_CLIENT_VERSION},
                },
                INITIALIZE_ID,
            ),
        )
        init_data = _decode(init_response)
        logger.info("[mcp:search_docs] initialize response=%s", json.dumps(init_data, default=str))
        session_id = init_response.headers.get(SESSION_HEADER)

        tools_response = _post(
            client,
            server_url,
            _rpc_envelope("tools/list", {}, TOOLS_LIST_ID),
            session_id=session_id,
        )
        tools_data = _decode(tools_response)
        tool_names = _advertised_tools(tools_data)
        logger.info("[mcp:search_docs] available tools=%s", tool_names)
        if MCP_SEARCH_TOOL not in tool_names:
            logger.warning("[mcp:search_docs] server does not advertise tool %r; calling it anyway", MCP_SEARCH_TOOL)

        search_response = _post(
            client,
            server_url,
            _rpc_envelope(
                "tools/call",
                {"name": MCP_SEARCH_TOOL, "arguments": {"query": query}},
                TOOLS_CALL_ID,
            ),
            session_id=session_id,
        )
        search_data = _decode(search_response)
    except httpx.HTTPStatusError as e:
        logger.error(
            "[mcp:search_docs] server error status=%s body=%s",
            e.response.status_code,
            e.response.text[:500],
        )
        return None
    except httpx.HTTPError as e:
        logger.error("[mcp:search_docs] request failed: %s", e)
        return None

    text = extract_text_content(search_data)
    logger.info("[mcp:search_docs] OUT text_len=%d", len(text))
    return text
