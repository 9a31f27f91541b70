"""Residue FastAPI app: transcript mapping entry point."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from residue import config
from residue.parsers.platforms.registry import list_agents
from residue.routers.transcripts import transcripts_router

_log_level = getattr(logging, config.LOG_LEVEL, logging.INFO)
logging.basicConfig(level=_log_level if isinstance(_log_level, int) else logging.INFO)
logger = logging.getLogger("residue")


app = FastAPI(
    title="Residue API",
    description="Maps AI coding-agent session logs into canonical transcripts",
    version="0.1.0",
)

# CORS: allow the dashboard dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        config.FRONTEND_ORIGIN,
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(transcripts_router)
logger.info("Registered transcript mappers: %s", ", ".join(list_agents()))


@app.get("/api/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "agents": list_agents()}
