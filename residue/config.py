"""Residue transcript service configuration."""
import os


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


# Transcripts above this size are refused before mapping.
MAX_TRANSCRIPT_BYTES = _env_int("RESIDUE_MAX_TRANSCRIPT_BYTES", 50 * 1024 * 1024)

LOG_LEVEL = os.getenv("RESIDUE_LOG_LEVEL", "INFO").strip().upper() or "INFO"

# CORS
FRONTEND_ORIGIN = os.getenv("RESIDUE_FRONTEND_ORIGIN", "http://localhost:3000")
