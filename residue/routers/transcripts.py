"""API router for mapping raw agent transcripts into canonical messages."""
from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from residue import config
from residue.models import AgentInfo, TranscriptRequest, TranscriptResponse
from residue.parsers.platforms.registry import get_mapper, list_agents
from residue.parsers.timestamps import timestamp_range
from residue.session_ids import derive_session_id

logger = logging.getLogger("residue.api")

transcripts_router = APIRouter(prefix="/api/transcripts", tags=["transcripts"])


@transcripts_router.get("/agents", response_model=list[AgentInfo])
def list_transcript_agents():
    """List agent names that have a registered transcript mapper."""
    return [AgentInfo(name=name) for name in list_agents()]


@transcripts_router.post(
    "/{agent}/messages",
    response_model=TranscriptResponse,
    response_model_exclude_none=True,
)
def map_transcript_messages(agent: str, payload: TranscriptRequest):
    """Map a raw session log for `agent` into its canonical transcript."""
    mapper = get_mapper(agent)
    if mapper is None:
        raise HTTPException(status_code=404, detail=f"No transcript mapper for agent '{agent}'")

    # Lone surrogates from JSON escapes become "?" before mapping.
    encoded = payload.raw.encode("utf-8", errors="replace")
    size = len(encoded)
    if size > config.MAX_TRANSCRIPT_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Transcript is {size} bytes; limit is {config.MAX_TRANSCRIPT_BYTES}",
        )

    messages = mapper(encoded.decode("utf-8"))
    logger.debug("Mapped %s transcript into %d messages", agent, len(messages))

    timestamps = timestamp_range(messages)
    return TranscriptResponse(
        agent=agent,
        sessionId=derive_session_id(payload.dataPath) if payload.dataPath else None,
        messages=messages,
        firstMessageAt=timestamps.firstMessageAt,
        lastMessageAt=timestamps.lastMessageAt,
    )
