"""Active-branch reconstruction for parent-pointer transcript logs.

Agents that let a user edit a prompt or regenerate a reply append the new
entries to the same log, so the log is a tree. Only the path from the root to
the most recently produced leaf is what the user kept working with; sibling
branches are abandoned and must not appear in the transcript.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, TypeVar

T = TypeVar("T")

_ROOT_KEY = "__root__"


def _key(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def active_branch(
    entries: Sequence[T],
    id_of: Callable[[T], Any],
    parent_of: Callable[[T], Any],
) -> list[T]:
    """Return the chronological root-to-leaf path ending at the latest leaf.

    `entries` must already be limited to conversational entries that carry an
    id. The leaf is the last entry, in log order, that no other entry names as
    its parent. When no leaf exists the entries are returned unreduced.
    """
    children_of: dict[str, list[int]] = {}
    index_by_id: dict[str, int] = {}

    for idx, entry in enumerate(entries):
        entry_id = _key(id_of(entry))
        if entry_id is None:
            continue
        index_by_id[entry_id] = idx
        parent_key = _key(parent_of(entry)) or _ROOT_KEY
        children_of.setdefault(parent_key, []).append(idx)

    leaf_id: Optional[str] = None
    for entry in reversed(entries):
        entry_id = _key(id_of(entry))
        if entry_id is not None and not children_of.get(entry_id):
            leaf_id = entry_id
            break

    if leaf_id is None:
        return list(entries)

    branch: list[T] = []
    seen: set[str] = set()
    current_id: Optional[str] = leaf_id
    while current_id and current_id not in seen:
        idx = index_by_id.get(current_id)
        if idx is None:
            break
        seen.add(current_id)
        entry = entries[idx]
        branch.append(entry)
        current_id = _key(parent_of(entry))

    branch.reverse()
    return branch
