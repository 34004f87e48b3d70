"""
Unit tests for result selection: parsing search output and LLM-driven URL choice.

The LLM is patched; no API key is needed.
"""

from unittest.mock import patch

import pytest

from app.mcp.client import NO_DOCS_FOUND
from app.services.selection_service import (
    SearchResultItem,
    parse_search_results,
    parse_url_selection,
    select_urls,
)

SEARCH_TEXT = (
    "Title: Quickstart\n"
    "Link: https://docs.example.com/quickstart\n"
    "Content: Install the SDK and run a first job.\n"
    "\n---\n\n"
    "Title: Checkpoints\n"
    "Link: https://docs.example.com/checkpoints\n"
    "Content: Save and restore model state."
)


class TestParseSearchResults:
    """Tests for parse_search_results()."""

    def test_parses_items_in_order(self) -> None:
        assert parse_search_results(SEARCH_TEXT) == [
            SearchResultItem(
                title="Quickstart",
                link="https://docs.example.com/quickstart",
                content="Install the SDK and run a first job.",
            ),
            SearchResultItem(
                title="Checkpoints",
                link="https://docs.example.com/checkpoints",
                content="Save and restore model state.",
            ),
        ]

    def test_trailing_item_without_blank_line_is_kept(self) -> None:
        items = parse_search_results("Title: Only\nLink: https://x.example/only")
        assert items == [SearchResultItem(title="Only", link="https://x.example/only")]

    def test_lines_before_first_title_are_ignored(self) -> None:
        items = parse_search_results("Link: https://orphan.example\nTitle: Real\nContent: body")
        assert items == [SearchResultItem(title="Real", content="body")]

    def test_item_with_empty_title_is_dropped(self) -> None:
        items = parse_search_results("Title:   \nLink: https://a.example\nTitle: B")
        assert items == [SearchResultItem(title="B")]

    def test_sentinel_parses_to_nothing(self) -> None:
        assert parse_search_results(NO_DOCS_FOUND) == []

    def test_empty_text(self) -> None:
        assert parse_search_results("") == []


class TestParseUrlSelection:
    """Tests for parse_url_selection()."""

    def test_plain_array(self) -> None:
        assert parse_url_selection('["https://a", "https://b"]') == ["https://a", "https://b"]

    def test_array_embedded_in_prose(self) -> None:
        reply = 'Here you go:\n["https://a"]\nThese are the best.'
        assert parse_url_selection(reply) == ["https://a"]

    def test_truncates_to_three(self) -> None:
        reply = '["https://1", "https://2", "https://3", "https://4", "https://5"]'
        assert parse_url_selection(reply) == ["https://1", "https://2", "https://3"]

    def test_prose_without_array_is_empty(self) -> None:
        assert parse_url_selection("The quickstart page looks most relevant.") == []

    def test_invalid_json_is_empty(self) -> None:
        assert parse_url_selection("[https://a, https://b]") == []

    def test_non_string_entries_dropped(self) -> None:
        assert parse_url_selection('[1, "https://a", null, {"u": 2}]') == ["https://a"]

    def test_empty_array(self) -> None:
        assert parse_url_selection("[]") == []


class TestSelectUrls:
    """Tests for select_urls()."""

    def test_returns_model_choice(self) -> None:
        with patch(
            "app.services.selection_service.chat_completion",
            return_value='["https://docs.example.com/checkpoints"]',
        ) as mock_llm:
            urls = select_urls("how to checkpoint", SEARCH_TEXT)
        assert urls == ["https://docs.example.com/checkpoints"]
        messages = mock_llm.call_args.args[0]
        assert messages[0]["role"] == "system"
        prompt = messages[1]["content"]
        assert 'User Question: "how to checkpoint"' in prompt
        assert "1. Title: Quickstart" in prompt
        assert "URL: https://docs.example.com/checkpoints" in prompt
        assert "Summary: Save and restore model state." in prompt
        assert "return: []" in prompt
        assert mock_llm.call_args.kwargs == {"temperature": 0.3, "max_tokens": 200}

    @pytest.mark.parametrize(
        "reply",
        [
            '["a", "b", "c", "d"]',
            '["a", "b", "c", "d", "e", "f", "g"]',
            "no array at all",
            '{"urls": ["a"]}',
            "[not json]",
            "",
        ],
    )
    def test_never_more_than_three(self, reply: str) -> None:
        with patch("app.services.selection_service.chat_completion", return_value=reply):
            assert len(select_urls("q", SEARCH_TEXT)) <= 3

    def test_llm_error_degrades_to_empty(self) -> None:
        with patch(
            "app.services.selection_service.chat_completion",
            side_effect=RuntimeError("Error code: 401"),
        ):
            assert select_urls("q", SEARCH_TEXT) == []

    def test_no_items_skips_llm(self) -> None:
        with patch("app.services.selection_service.chat_completion") as mock_llm:
            assert select_urls("q", NO_DOCS_FOUND) == []
        mock_llm.assert_not_called()
