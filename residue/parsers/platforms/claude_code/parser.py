"""Map Claude Code JSONL session logs into canonical Messages.

Each line is `{type, uuid, parentUuid, isMeta?, isSidechain?, timestamp?,
message}`. Only `user` and `assistant` entries form the conversation; system,
summary, progress, file-history-snapshot and queue-operation entries are
skipped. A single assistant reply (one `message.id`) is usually written as
several entries, e.g. thinking -> text -> tool_use, chained via parentUuid.

User entries carry either a string (a typed prompt), a list of text blocks
(often auto-injected and flagged `isMeta`), or a list of tool_result blocks
answering earlier tool_use blocks.
"""
from __future__ import annotations

from typing import Any

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

_CONVERSATION_TYPES = {"user", "assistant"}


def _is_conversation_entry(entry: dict[str, Any]) -> bool:
    uuid = entry.get("uuid")
    return (
        entry.get("type") in _CONVERSATION_TYPES
        and isinstance(uuid, str)
        and bool(uuid)
        and not entry.get("isSidechain")
    )


def _timestamp(entry: dict[str, Any]) -> str | None:
    value = entry.get("timestamp")
    return value if isinstance(value, str) and value else None


def _handle_user(turns: TurnAssembler, entry: dict[str, Any]) -> None:
    # Injected content is invisible: it neither ends the current turn nor
    # becomes a message.
    if entry.get("isMeta"):
        return
    turns.flush()

    message = entry.get("message")
    if not isinstance(message, dict):
        return

    content = message.get("content")
    if isinstance(content, str):
        turns.add_human(content, _timestamp(entry))
        return

    blocks = content_blocks(content)
    tool_results = [block for block in blocks if block.get("type") == "tool_result"]
    if tool_results:
        for block in tool_results:
            turns.resolve_tool_result(
                block.get("tool_use_id"),
                text_from_content(block.get("content")),
                is_error=bool(block.get("is_error")),
                error_prefix=ERROR_PREFIX,
            )
        return

    text = text_from_content(blocks)
    if text:
        turns.add_human(text, _timestamp(entry))


def _handle_assistant(turns: TurnAssembler, entry: dict[str, Any]) -> None:
    message = entry.get("message")
    if not isinstance(message, dict):
        return

    message_id = message.get("id")
    turn_id = message_id if isinstance(message_id, str) else None
    turns.begin_assistant(turn_id, _timestamp(entry), message.get("model"))

    for block in content_blocks(message.get("content")):
        block_type = block.get("type")
        if block_type == "text" and isinstance(block.get("text"), str):
            turns.add_text(block["text"])
        elif block_type == "thinking" and block_text(block, "thinking"):
            turns.add_thinking(block_text(block, "thinking"))
        elif block_type == "tool_use" and isinstance(block.get("name"), str):
            turns.add_tool_call(
                block["name"],
                render_tool_input(block.get("input")),
                block.get("id"),
            )


def map_session(raw: str) -> list[Message]:
    """Reduce a Claude Code session log to its active-branch transcript."""
    entries = parse_jsonl_entries(raw)
    if not entries:
        return []

    conversation = [entry for entry in entries if _is_conversation_entry(entry)]
    branch = active_branch(
        conversation,
        id_of=lambda entry: entry.get("uuid"),
        parent_of=lambda entry: entry.get("parentUuid"),
    )
    if not branch:
        return []

    turns = TurnAssembler()
    for entry in branch:
        if entry.get("type") == "user":
            _handle_user(turns, entry)
        elif entry.get("type") == "assistant":
            _handle_assistant(turns, entry)

    return turns.finish()
