"""Map pi JSONL session logs into canonical Messages."""
from __future__ import annotations

from typing import Any

from residue.date_utils import epoch_ms_to_iso
from residue.models import Message
from residue.parsers.branches import active_branch
from residue.parsers.entries import (
    block_text,
    content_blocks,
    parse_jsonl_entries,
    render_tool_input,
    text_from_content,
)
from residue.parsers.turns import ERROR_PREFIX, TurnAssembler


def _is_message_entry(entry: dict[str, Any]) -> bool:
    entry_id = entry.get("id")
    return entry.get("type") == "message" and isinstance(entry_id, str) and bool(entry_id)


def _timestamp(entry: dict[str, Any], message: dict[str, Any]) -> str | None:
    rendered = epoch_ms_to_iso(message.get("timestamp"))
    if rendered:
        return rendered
    value = entry.get("timestamp")
    return value if isinstance(value, str) and value else None


def _add_assistant(turns: TurnAssembler, entry: dict[str, Any], message: dict[str, Any]) -> None:
    # pi writes one entry per assistant reply, so the entry id is the turn.
    turns.begin_assistant(entry.get("id"), _timestamp(entry, message), message.get("model"))

    content = message.get("content")
    text = text_from_content(content)
    if text:
        turns.add_text(text)

    for block in content_blocks(content):
        block_type = block.get("type")
        if block_type == "thinking" and block_text(block, "thinking"):
            turns.add_thinking(block_text(block, "thinking"))
        elif block_type == "toolCall" and block_text(block, "name"):
            arguments = block.get("arguments")
            turns.add_tool_call(
                block_text(block, "name"),
                render_tool_input(arguments) if arguments is not None else "",
                block.get("id"),
            )


def map_session(raw: str) -> list[Message]:
    """Reduce a pi session log to its active-branch transcript.

    Besides `message` entries, pi logs carry a session header and entries such
    as bashExecution, custom, branchSummary and compactionSummary; only
    messages with an id take part in the conversation.
    """
    entries = parse_jsonl_entries(raw)
    if not entries:
        return []

    branch = active_branch(
        [entry for entry in entries if _is_message_entry(entry)],
        id_of=lambda entry: entry.get("id"),
        parent_of=lambda entry: entry.get("parentId"),
    )
    if not branch:
        return []

    turns = TurnAssembler()
    for entry in branch:
        message = entry.get("message")
        if not isinstance(message, dict):
            continue

        role = message.get("role")
        if role == "user":
            turns.add_human(text_from_content(message.get("content")), _timestamp(entry, message))
        elif role == "assistant":
            _add_assistant(turns, entry, message)
        elif role == "toolResult":
            turns.resolve_tool_result(
                message.get("toolCallId"),
                text_from_content(message.get("content")),
                is_error=bool(message.get("isError")),
                error_prefix=ERROR_PREFIX,
            )

    return turns.finish()
