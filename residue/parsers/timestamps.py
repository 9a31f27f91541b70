"""First/last message timestamps for a mapped transcript."""
from __future__ import annotations

from residue.date_utils import iso_to_epoch_seconds
from residue.models import Message, TimestampRange
from residue.parsers.platforms.registry import get_mapper


def timestamp_range(messages: list[Message]) -> TimestampRange:
    """Earliest and latest message timestamps as epoch seconds.

    Messages without a parseable timestamp are ignored; the range is compared
    by value, not by position, since agents do not always log in order.
    """
    seconds = [
        value
        for value in (iso_to_epoch_seconds(message.timestamp) for message in messages)
        if value is not None
    ]
    if not seconds:
        return TimestampRange()
    return TimestampRange(firstMessageAt=min(seconds), lastMessageAt=max(seconds))


def extract_timestamps(agent: str, raw: str) -> TimestampRange:
    mapper = get_mapper(agent)
    if mapper is None:
        return TimestampRange()
    return timestamp_range(mapper(raw))
