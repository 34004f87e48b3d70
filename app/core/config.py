"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Platform the assistant answers questions about (used in prompts and error guidance)
PLATFORM_NAME: str = os.getenv("PLATFORM_NAME", "Cerebras").strip() or "Cerebras"

# LLM: any OpenAI-compatible chat completions endpoint (Cerebras by default)
LLM_API_KEY: str = (os.getenv("LLM_API_KEY") or os.getenv("CEREBRAS_API_KEY") or "").strip()
LLM_BASE_URL: str = (
    os.getenv("LLM_BASE_URL", "https://api.cerebras.ai/v1").strip() or "https://api.cerebras.ai/v1"
)
LLM_MODEL: str = (
    os.getenv("LLM_MODEL", "qwen-3-235b-a22b-instruct-2507").strip()
    or "qwen-3-235b-a22b-instruct-2507"
)
LLM_API_TIMEOUT: float = 60.0

# Sampling per call site
SELECTION_TEMPERATURE: float = 0.3
SELECTION_MAX_TOKENS: int = 200
ANSWER_TEMPERATURE: float = 0.7
ANSWER_MAX_TOKENS: int = 1000

# Documentation search (MCP server)
MCP_SERVER_URL: str = (
    os.getenv("MCP_SERVER_URL", "https://training-docs.cerebras.ai/mcp").strip()
    or "https://training-docs.cerebras.ai/mcp"
)
MCP_PROTOCOL_VERSION: str = "2024-11-05"
MCP_CLIENT_NAME: str = "cerebras-docs-chatbot"
MCP_CLIENT_VERSION: str = "1.0.0"
MCP_SEARCH_TOOL: str = "search"
MCP_HTTP_TIMEOUT: float = 30.0

# Page fetching
FETCH_TIMEOUT: float = 5.0
FETCH_USER_AGENT: str = "Cerebras-Docs-Chatbot/1.0"
MAX_PAGE_CHARS: int = 10_000
MAX_SELECTED_URLS: int = 3
