"""Tolerant raw-entry parsing shared by the platform mappers."""
from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger("residue.parsers")


def _decode(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


def parse_jsonl_entries(raw: str) -> list[dict[str, Any]]:
    """Parse newline-delimited JSON, dropping blank and malformed lines.

    A malformed line never aborts the parse; the remaining lines are still
    decoded. List position is the entry's original position in the log.
    """
    entries: list[dict[str, Any]] = []
    if not isinstance(raw, str) or not raw.strip():
        return entries

    dropped = 0
    for line in raw.strip().split("\n"):
        if not line.strip():
            continue
        parsed = _decode(line)
        if isinstance(parsed, dict):
            entries.append(parsed)
        else:
            dropped += 1

    if dropped:
        logger.debug("Skipped %d malformed transcript line(s)", dropped)
    return entries


def parse_json_array(raw: str) -> list[dict[str, Any]]:
    """Parse a whole-document JSON array; anything else yields no entries."""
    if not isinstance(raw, str) or not raw.strip():
        return []

    parsed = _decode(raw)
    if not isinstance(parsed, list):
        logger.debug("Transcript document is not a JSON array")
        return []
    return [item for item in parsed if isinstance(item, dict)]


def content_blocks(content: Any) -> list[dict[str, Any]]:
    if not isinstance(content, list):
        return []
    return [block for block in content if isinstance(block, dict)]


def block_text(block: dict[str, Any], key: str = "text") -> str:
    value = block.get(key)
    return value if isinstance(value, str) else ""


def text_from_content(content: Any) -> str:
    """String content verbatim; block lists keep only non-empty text blocks."""
    if isinstance(content, str):
        return content
    chunks = [
        block_text(block)
        for block in content_blocks(content)
        if block.get("type") == "text" and block_text(block)
    ]
    return "\n".join(chunks)


def render_tool_input(value: Any) -> str:
    """Pretty-print structured tool arguments the way agents display them."""
    if value is None:
        value = {}
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)
