"""Transcript mapper registry for platform-specific implementations."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from residue import config
from residue.models import Message
from residue.parsers.platforms.claude_code import parser as claude_code_parser
from residue.parsers.platforms.opencode import parser as opencode_parser
from residue.parsers.platforms.pi import parser as pi_parser

logger = logging.getLogger("residue.parsers")

Mapper = Callable[[str], list[Message]]


def _total(agent: str, mapper: Mapper) -> Mapper:
    def mapped(raw: str) -> list[Message]:
        if not isinstance(raw, str) or not raw.strip():
            return []
        try:
            return mapper(raw)
        except Exception:
            logger.exception("Transcript mapper for %s failed; returning no messages", agent)
            return []

    mapped.__name__ = f"map_{agent.replace('-', '_')}"
    mapped.__doc__ = mapper.__doc__
    return mapped


MAPPER_REGISTRY: dict[str, Mapper] = {
    "claude-code": _total("claude-code", claude_code_parser.map_session),
    "opencode": _total("opencode", opencode_parser.map_session),
    "pi": _total("pi", pi_parser.map_session),
}


def get_mapper(agent: str) -> Optional[Mapper]:
    """Return the mapper registered for an agent name, or None."""
    return MAPPER_REGISTRY.get(agent)


def list_agents() -> list[str]:
    return sorted(MAPPER_REGISTRY)


def map_transcript(agent: str, raw: str) -> Optional[list[Message]]:
    """Map raw session text for `agent`. None means the agent is unknown."""
    mapper = get_mapper(agent)
    if mapper is None:
        return None
    return mapper(raw)


def map_session_file(agent: str, path: Path) -> Optional[list[Message]]:
    """Read and map a session file, refusing files above the size limit.

    Unreadable or oversized files degrade to an empty transcript; only an
    unknown agent yields None.
    """
    mapper = get_mapper(agent)
    if mapper is None:
        return None

    try:
        size = path.stat().st_size
        if size > config.MAX_TRANSCRIPT_BYTES:
            logger.warning(
                "Skipping %s transcript %s: %d bytes exceeds limit of %d",
                agent,
                path,
                size,
                config.MAX_TRANSCRIPT_BYTES,
            )
            return []
        raw = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Failed to read %s transcript %s: %s", agent, path, exc)
        return []

    return mapper(raw)
