"""Keyword/documentation table for the Orion language.

The table maps a built-in word to its documentation and is loaded once at
server start from a JSON file (``docs.json`` next to this module by default).
The analyzer only consults its keys; hover and completion render the entries.

A table that cannot be read degrades to an empty one: the server keeps
running, and every unknown word simply becomes a candidate "undefined".
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_DOCS_PATH = Path(__file__).resolve().parent / "docs.json"


class DocsTableError(Exception):
    def __init__(self, message: str, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"{message}: {path}")


@dataclass
class DocEntry:
    """Documentation for one built-in word."""

    syntax: str = ""
    description: str = ""
    # {name: description} or a bare list of names
    params: Union[dict[str, str], list[str], None] = None
    returns: Optional[str] = None
    example: Optional[str] = None

    @classmethod
    def from_json(cls, raw: dict) -> DocEntry:
        params = raw.get("params")
        if not isinstance(params, (dict, list)):
            params = None
        return cls(
            syntax=str(raw.get("syntax") or ""),
            description=str(raw.get("description") or ""),
            params=params,
            returns=raw.get("returns") or None,
            example=raw.get("example") or None,
        )

    @property
    def is_callable(self) -> bool:
        return bool(self.params) or "(" in self.syntax


DocsTable = dict[str, DocEntry]


def read_docs_table(path: Union[str, Path]) -> DocsTable:
    """Read and validate a docs table. Raises DocsTableError on any failure."""
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise DocsTableError(f"cannot read docs table ({e.strerror})", path) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DocsTableError(f"invalid JSON in docs table ({e})", path) from e

    if not isinstance(raw, dict):
        raise DocsTableError("docs table must be a JSON object", path)

    table: DocsTable = {}
    for word, entry in raw.items():
        if isinstance(entry, dict):
            table[word] = DocEntry.from_json(entry)
        else:
            logger.warning("skipping malformed docs entry %r in %s", word, path)
    return table


def load_docs_table(path: Union[str, Path, None] = None) -> DocsTable:
    """Load the docs table, falling back to an empty table on error."""
    path = path or DEFAULT_DOCS_PATH
    try:
        table = read_docs_table(path)
    except DocsTableError as e:
        logger.error("%s; continuing with an empty keyword table", e)
        return {}
    logger.info("loaded %d keywords from %s", len(table), path)
    return table


def get_hover_markdown(word: str, entry: DocEntry) -> str:
    """Render a docs table entry as hover markdown."""
    parts = [f"**{word}**\n"]
    if entry.syntax:
        parts.append(f"```orion\n{entry.syntax}\n```\n")
    if entry.description:
        parts.append(f"{entry.description}\n")
    if isinstance(entry.params, dict) and entry.params:
        lines = ["**Parameters:**"]
        lines.extend(f"- `{name}`: {desc}" for name, desc in entry.params.items())
        parts.append("\n".join(lines) + "\n")
    elif isinstance(entry.params, list) and entry.params:
        lines = ["**Parameters:**"]
        lines.extend(f"- `{name}`" for name in entry.params)
        parts.append("\n".join(lines) + "\n")
    if entry.returns:
        parts.append(f"**Returns:** {entry.returns}\n")
    if entry.example:
        parts.append(f"**Example:**\n```orion\n{entry.example}\n```")
    return "\n".join(parts).rstrip() + "\n"
