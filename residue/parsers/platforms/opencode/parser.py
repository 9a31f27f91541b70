"""Map OpenCode exported sessions into canonical Messages.

An export is one JSON array of `{info, parts}` objects in chronological
order. OpenCode does not branch, so no active-branch reduction applies, and
tool parts carry their own result in an inline `state`.
"""
from __future__ import annotations

from typing import Any

from residue.date_utils import epoch_ms_to_iso
from residue.models import Message
from residue.parsers.entries import block_text, content_blocks, parse_json_array, render_tool_input
from residue.parsers.turns import TurnAssembler

ERROR_PREFIX = "Error: "


def _parts_text(parts: list[dict[str, Any]], part_type: str) -> list[str]:
    return [block_text(part) for part in parts if part.get("type") == part_type and block_text(part)]


def _created_at(info: dict[str, Any]) -> str | None:
    time_info = info.get("time")
    if not isinstance(time_info, dict):
        return None
    return epoch_ms_to_iso(time_info.get("created"))


def _add_tool_part(turns: TurnAssembler, part: dict[str, Any]) -> None:
    state = part.get("state")
    if not isinstance(state, dict):
        turns.add_tool_call(block_text(part, "tool"), "")
        return

    call_id = part.get("callID")
    handle = turns.add_tool_call(block_text(part, "tool"), render_tool_input(state.get("input")), call_id)

    status = state.get("status")
    if status == "completed":
        output, is_error = block_text(state, "output"), False
    elif status == "error":
        output, is_error = block_text(state, "error"), True
    else:
        # pending/running calls have no result yet
        return

    if not turns.resolve_tool_result(call_id, output, is_error=is_error, error_prefix=ERROR_PREFIX):
        turns.set_tool_output(handle, output, is_error=is_error, error_prefix=ERROR_PREFIX)


def map_session(raw: str) -> list[Message]:
    """Map an OpenCode export; anything but a JSON array yields no messages."""
    entries = parse_json_array(raw)
    if not entries:
        return []

    turns = TurnAssembler()
    for position, entry in enumerate(entries):
        info = entry.get("info")
        if not isinstance(info, dict):
            continue
        parts = content_blocks(entry.get("parts"))

        role = info.get("role")
        if role == "user":
            text = "\n".join(_parts_text(parts, "text"))
            if text:
                turns.add_human(text, _created_at(info))
        elif role == "assistant":
            # Every exported assistant message is its own turn.
            turns.begin_assistant(position, _created_at(info), info.get("modelID"))
            text = "\n".join(_parts_text(parts, "text"))
            if text:
                turns.add_text(text)
            for part in parts:
                if part.get("type") == "tool" and block_text(part, "tool"):
                    _add_tool_part(turns, part)
            for reasoning in _parts_text(parts, "reasoning"):
                turns.add_thinking(reasoning)

    return turns.finish()
