"""Deterministic session identifiers derived from agent data paths."""
from __future__ import annotations

import hashlib


def derive_session_id(data_path: str) -> str:
    """Hash an agent's data path into a UUID-shaped session ID.

    The same transcript file always yields the same ID, so re-capturing a
    session after a restart or session switch does not create a duplicate.
    """
    digest = hashlib.sha256(data_path.encode("utf-8", errors="surrogatepass")).hexdigest()
    return "-".join(
        (digest[0:8], digest[8:12], digest[12:16], digest[16:20], digest[20:32])
    )
