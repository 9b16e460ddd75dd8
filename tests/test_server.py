"""Tests for MCP tool registration and tool output."""

import asyncio
import json
from pathlib import Path

import pytest

from gospel_library_mcp import server

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def fixture_corpus(monkeypatch):
    """Point the server's shared engine at the fixture corpus."""
    monkeypatch.setattr(server.engine, "data_dir", DATA_DIR)
    monkeypatch.setattr(server.engine, "_corpus", None)


def call_tool(name: str, arguments: dict) -> list:
    """Call a tool and decode the JSON payload of each text content block."""
    result = asyncio.run(server.mcp.call_tool(name, arguments))
    # Newer SDKs return (content, structured_content)
    content = result[0] if isinstance(result, tuple) else result
    payloads = []
    for block in content:
        data = json.loads(block.text)
        payloads.extend(data if isinstance(data, list) else [data])
    return payloads


def test_tools_registered():
    tools = asyncio.run(server.mcp.list_tools())
    names = {t.name for t in tools}
    assert names == {
        "list_collections",
        "get_book_info",
        "get_scripture_text",
        "search_scriptures",
        "list_conference_talks",
        "get_conference_talk",
        "search_conference_talks",
    }


def test_scope_arguments_optional():
    tools = {t.name: t for t in asyncio.run(server.mcp.list_tools())}
    schema = tools["search_scriptures"].inputSchema
    assert schema["required"] == ["query"]
    assert {"collection", "book", "chapter", "max_results"} <= set(schema["properties"])


class TestScriptureTextTool:
    def test_verse_range(self, fixture_corpus):
        verses = call_tool(
            "get_scripture_text",
            {
                "collection": "doctrine-and-covenants",
                "book": "Doctrine and Covenants",
                "chapter": 4,
                "verse_range": "2-3",
            },
        )
        assert [v["verse"] for v in verses] == [2, 3]
        assert verses[0]["reference"] == "Doctrine and Covenants 4:2"
        assert all("position" not in v for v in verses)

    def test_single_verse(self, fixture_corpus):
        (verse,) = call_tool(
            "get_scripture_text",
            {
                "collection": "old-testament",
                "book": "Genesis",
                "chapter": 1,
                "verse": 1,
            },
        )
        assert verse == {
            "verse": 1,
            "text": "In the beginning God created the heaven and the earth.",
            "reference": "Genesis 1:1",
        }
