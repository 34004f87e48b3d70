"""
Text processing for fetched documentation pages: markup stripping and truncation.

Pages are embedded verbatim in the answer prompt, so they are reduced to plain
text and capped before they reach the LLM.
"""

import re

from bs4 import BeautifulSoup

from app.core.config import MAX_PAGE_CHARS

NOISE_TAGS = ("script", "style", "noscript", "template")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_markup(text: str) -> str:
    """
    Reduce an HTML (or plain text) page to its visible text.

    Script, style and other non-rendered elements are dropped with their bodies;
    remaining text nodes are joined with spaces and whitespace runs collapse to one space.
    """
    if not text:
        return ""
    soup = BeautifulSoup(text, "html.parser")
    for element in soup(NOISE_TAGS):
        element.decompose()
    return _WHITESPACE_RE.sub(" ", soup.get_text(" ")).strip()


def truncate_text(text: str, max_chars: int = MAX_PAGE_CHARS) -> str:
    """Cap text at max_chars characters."""
    if not text:
        return ""
    return text[:max_chars]
