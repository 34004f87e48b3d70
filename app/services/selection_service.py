"""
Result selection: parse documentation search output into items and let the LLM
pick the pages worth fetching in full.
"""

import json
import logging
import re
from dataclasses import dataclass

from app.agent.llm import chat_completion
from app.core.config import MAX_SELECTED_URLS, SELECTION_MAX_TOKENS, SELECTION_TEMPERATURE

logger = logging.getLogger(__name__)

SELECTION_SYSTEM_PROMPT = (
    "You are a helpful assistant that analyzes search results. Return only valid JSON arrays."
)
_JSON_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)


@dataclass
class SearchResultItem:
    """One search hit: the Title/Link/Content block of the search output."""

    title: str
    link: str = ""
    content: str = ""


def parse_search_results(text: str) -> list[SearchResultItem]:
    """
    Scan search output line by line into SearchResultItems.

    A "Title:" line commits the item in progress and starts a new one; "Link:" and
    "Content:" lines fill the current item. The last item is committed at end of input.
    Lines before the first title are ignored.
    """
    committed: list[SearchResultItem] = []
    current: SearchResultItem | None = None
    for line in (text or "").split("\n"):
        if line.startswith("Title:"):
            if current is not None and current.title:
                committed.append(current)
            current = SearchResultItem(title=line[len("Title:"):].strip())
        elif current is None:
            continue
        elif line.startswith("Link:"):
            current.link = line[len("Link:"):].strip()
        elif line.startswith("Content:"):
            current.content = line[len("Content:"):].strip()
    if current is not None and current.title:
        committed.append(current)
    return committed


def build_selection_prompt(query: str, items: list[SearchResultItem]) -> str:
    listing = "\n".join(
        f"\n{i}. Title: {item.title}\n   URL: {item.link}\n   Summary: {item.content}\n"
        for i, item in enumerate(items, 1)
    )
    return (
        "Based on the user's question and the search results below, identify which documentation "
        "pages would be most relevant to fetch in full. Return ONLY a JSON array of URLs "
        f"(maximum {MAX_SELECTED_URLS}) that would best help answer the question.\n\n"
        f'User Question: "{query}"\n\n'
        f"Search Results:\n{listing}\n\n"
        'Return ONLY a JSON array of URLs, like: ["url1", "url2"]\n'
        "If none are relevant enough to fetch, return: []"
    )


def parse_url_selection(reply: str) -> list[str]:
    """Pull the bracketed JSON array out of an LLM reply. Anything unusable yields []."""
    match = _JSON_ARRAY_RE.search(reply or "")
    if not match:
        logger.info("[selection:parse_url_selection] no JSON array in reply")
        return []
    try:
        urls = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning("[selection:parse_url_selection] failed to parse URL selection: %s", e)
        return []
    if not isinstance(urls, list):
        return []
    return [u for u in urls if isinstance(u, str) and u.strip()][:MAX_SELECTED_URLS]


def select_urls(query: str, search_text: str) -> list[str]:
    """
    Ask the LLM which search hits to fetch in full. Returns at most MAX_SELECTED_URLS URLs.

    Never raises: parse or LLM failures degrade to an empty selection.
    """
    items = parse_search_results(search_text)
    logger.info("[selection:select_urls] IN  query=%r items=%d", query, len(items))
    if not items:
        return []
    messages = [
        {"role": "system", "content": SELECTION_SYSTEM_PROMPT},
        {"role": "user", "content": build_selection_prompt(query, items)},
    ]
    try:
        reply = chat_completion(
            messages,
            temperature=SELECTION_TEMPERATURE,
            max_tokens=SELECTION_MAX_TOKENS,
        ).strip()
    except Exception as e:
        logger.warning("[selection:select_urls] LLM selection failed: %s", e)
        return []
    logger.info("[selection:select_urls] llm_raw=%r", reply)
    urls = parse_url_selection(reply)
    logger.info("[selection:select_urls] OUT urls=%s", urls)
    return urls
