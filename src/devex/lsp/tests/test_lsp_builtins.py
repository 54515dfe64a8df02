"""Tests for loading and rendering the keyword documentation table."""

import json

import pytest

from src.devex.lsp.builtins import (
    DEFAULT_DOCS_PATH,
    DocEntry,
    DocsTableError,
    get_hover_markdown,
    load_docs_table,
    read_docs_table,
)


def write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoading:
    def test_reads_entries(self, tmp_path):
        path = write_json(tmp_path / "docs.json", {
            "show": {"syntax": "show(x)", "params": {"x": "value"}},
            "true": {"description": "Boolean true."},
        })
        table = load_docs_table(path)
        assert set(table) == {"show", "true"}
        assert table["show"].is_callable
        assert not table["true"].is_callable

    def test_missing_file_degrades_to_empty(self, tmp_path):
        assert load_docs_table(tmp_path / "nope.json") == {}

    def test_invalid_json_degrades_to_empty(self, tmp_path):
        path = tmp_path / "docs.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_docs_table(path) == {}

    def test_read_raises_on_missing_file(self, tmp_path):
        with pytest.raises(DocsTableError) as exc:
            read_docs_table(tmp_path / "nope.json")
        assert exc.value.path.endswith("nope.json")

    def test_read_raises_on_non_object(self, tmp_path):
        path = write_json(tmp_path / "docs.json", ["show"])
        with pytest.raises(DocsTableError, match="JSON object"):
            read_docs_table(path)

    def test_malformed_entries_are_skipped(self, tmp_path):
        path = write_json(tmp_path / "docs.json", {"show": {}, "bad": "text"})
        assert set(read_docs_table(path)) == {"show"}

    def test_bundled_table(self):
        table = load_docs_table(DEFAULT_DOCS_PATH)
        for word in ("show", "let", "const", "fn", "if", "while", "true", "len"):
            assert word in table
        assert table["len"].returns == "int"

    def test_default_path(self):
        assert load_docs_table() == load_docs_table(DEFAULT_DOCS_PATH)


class TestDocEntry:
    def test_from_json_ignores_bad_params(self):
        entry = DocEntry.from_json({"syntax": "x", "params": 3})
        assert entry.params is None

    def test_empty_values_become_none(self):
        entry = DocEntry.from_json({"returns": "", "example": ""})
        assert entry.returns is None and entry.example is None


class TestHoverMarkdown:
    def test_full_entry(self):
        entry = DocEntry(
            syntax="len(collection)",
            description="Counts elements.",
            params={"collection": "A list"},
            returns="int",
            example="len([1])",
        )
        text = get_hover_markdown("len", entry)
        assert text.startswith("**len**\n")
        assert "```orion\nlen(collection)\n```" in text
        assert "Counts elements." in text
        assert "**Parameters:**\n- `collection`: A list" in text
        assert "**Returns:** int" in text
        assert "**Example:**\n```orion\nlen([1])\n```" in text

    def test_parameter_list(self):
        text = get_hover_markdown("type", DocEntry(params=["value"]))
        assert "- `value`" in text

    def test_minimal_entry(self):
        assert get_hover_markdown("null", DocEntry()) == "**null**\n"
