"""
Page fetching: download the selected documentation pages and turn them into
one prompt-ready context block.

Pages are fetched one after another. A page that fails is logged and skipped;
the batch only fails when no page could be fetched.
"""

import json
import logging
from dataclasses import dataclass

import httpx

from app.core.config import FETCH_TIMEOUT, FETCH_USER_AGENT, MAX_PAGE_CHARS
from app.services.text_processing import strip_markup, truncate_text

logger = logging.getLogger(__name__)

FETCH_HEADERS = {
    "Accept": "text/html,application/json",
    "User-Agent": FETCH_USER_AGENT,
}
DOC_SEPARATOR = "\n---\n"


@dataclass
class FetchedDoc:
    """Cleaned text of one fetched page."""

    url: str
    text: str

    def as_context(self) -> str:
        return f"\n\n=== Content from {self.url} ===\n{self.text}\n"


def fetch_page(url: str, client: httpx.Client) -> FetchedDoc | None:
    """Fetch one URL and return its cleaned text, or None if the fetch failed or was empty."""
    logger.info("[fetch:fetch_page] IN  url=%s", url)
    try:
        response = client.get(url, headers=FETCH_HEADERS)
        response.raise_for_status()
        if "json" in response.headers.get("content-type", ""):
            text = json.dumps(response.json())
        else:
            text = strip_markup(response.text)
    except httpx.HTTPStatusError as e:
        logger.warning("[fetch:fetch_page] %s returned %s: %s", url, e.response.status_code, e.response.text[:200])
        return None
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        logger.warning("[fetch:fetch_page] failed to fetch %s: %s", url, e)
        return None
    if not text.strip():
        logger.info("[fetch:fetch_page] empty body from %s", url)
        return None
    doc = FetchedDoc(url=url, text=truncate_text(text, MAX_PAGE_CHARS))
    logger.info("[fetch:fetch_page] OUT url=%s text_len=%d", url, len(doc.text))
    return doc


def fetch_full_content(urls: list[str], client: httpx.Client | None = None) -> str | None:
    """
    Fetch every URL and join the wrapped page texts.

    Returns None when urls is empty or every fetch failed.
    """
    if not urls:
        return None
    if client is None:
        with httpx.Client(timeout=FETCH_TIMEOUT, follow_redirects=True) as own_client:
            return fetch_full_content(urls, client=own_client)

    docs = [doc for doc in (fetch_page(url, client) for url in urls) if doc is not None]
    logger.info("[fetch:fetch_full_content] OUT fetched=%d of %d", len(docs), len(urls))
    if not docs:
        return None
    return DOC_SEPARATOR.join(doc.as_context() for doc in docs)
