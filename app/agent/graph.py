"""
LangGraph pipeline: search docs → select pages → fetch pages → compose answer.

Orchestration only; every node degrades on its own except compose_answer, whose
errors propagate out of run_pipeline. When the documentation search is unreachable
the graph skips straight to composition without context.
"""

import logging
from typing import Literal, TypedDict

from langgraph.graph import END, StateGraph

from app.mcp.client import search_docs
from app.services.answer_service import compose_answer
from app.services.fetch_service import fetch_full_content
from app.services.selection_service import select_urls

logger = logging.getLogger(__name__)


class PipelineState(TypedDict):
    message: str
    search_text: str | None
    urls: list
    context: str | None
    answer: str


def _search_node(state: PipelineState) -> dict:
    """Node 1: documentation search over MCP. None means the server was unreachable."""
    message = state.get("message") or ""
    logger.info("[graph:search_docs] IN  message=%r", message)
    search_text = search_docs(message)
    logger.info(
        "[graph:search_docs] OUT reachable=%s text_len=%d",
        search_text is not None, len(search_text or ""),
    )
    return {"search_text": search_text}


def _route_after_search(state: PipelineState) -> Literal["select_urls", "compose_answer"]:
    """Skip selection and fetching when search returned nothing at all."""
    next_node = "compose_answer" if state.get("search_text") is None else "select_urls"
    logger.info("[graph:route_after_search] -> %s", next_node)
    return next_node


def _select_node(state: PipelineState) -> dict:
    """Node 2: LLM picks up to three result pages worth reading in full."""
    urls = select_urls(state.get("message") or "", state.get("search_text") or "")
    logger.info("[graph:select_urls] OUT urls=%s", urls)
    return {"urls": urls}


def _fetch_node(state: PipelineState) -> dict:
    """Node 3: fetch the selected pages; fall back to the search summaries when none arrive."""
    urls = state.get("urls") or []
    search_text = state.get("search_text")
    fetched = fetch_full_content(urls) if urls else None
    context = fetched if fetched is not None else search_text
    logger.info(
        "[graph:fetch_pages] OUT urls=%d fetched=%s context_len=%d",
        len(urls), fetched is not None, len(context or ""),
    )
    return {"context": context}


def _compose_node(state: PipelineState) -> dict:
    """Node 4: final answer, grounded when context is present."""
    answer = compose_answer(state.get("message") or "", state.get("context"))
    return {"answer": answer}


def build_graph():
    """
    Build and compile the pipeline graph.
    search → (select → fetch →) compose → END.
    """
    graph = StateGraph(PipelineState)

    graph.add_node("search_docs", _search_node)
    graph.add_node("select_urls", _select_node)
    graph.add_node("fetch_pages", _fetch_node)
    graph.add_node("compose_answer", _compose_node)

    graph.set_entry_point("search_docs")
    graph.add_conditional_edges("search_docs", _route_after_search)
    graph.add_edge("select_urls", "fetch_pages")
    graph.add_edge("fetch_pages", "compose_answer")
    graph.add_edge("compose_answer", END)

    return graph.compile()


def run_pipeline(message: str) -> dict:
    """
    Run the pipeline for one user message. Returns answer, context and the selected urls.
    """
    if not message or not str(message).strip():
        raise ValueError("message is required")
    msg = str(message).strip()
    logger.info("[run_pipeline] START message=%r", msg)
    initial: PipelineState = {
        "message": msg,
        "search_text": None,
        "urls": [],
        "context": None,
        "answer": "",
    }
    final = build_graph().invoke(initial)
    answer = final.get("answer") or ""
    logger.info("[run_pipeline] END urls=%s answer_len=%d", final.get("urls") or [], len(answer))
    return {
        "answer": answer,
        "context": final.get("context"),
        "urls": final.get("urls") or [],
    }
