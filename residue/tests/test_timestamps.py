import json
import unittest

from residue.models import Message
from residue.parsers.timestamps import extract_timestamps, timestamp_range


class TimestampRangeTests(unittest.TestCase):
    def test_range_uses_min_and_max_in_epoch_seconds(self) -> None:
        messages = [
            Message(role="human", content="b", timestamp="2026-01-24T15:00:05.900Z"),
            Message(role="assistant", content="a", timestamp="2026-01-24T15:00:00.000Z"),
            Message(role="assistant", content="no time"),
            Message(role="human", content="bad", timestamp="yesterday"),
        ]

        result = timestamp_range(messages)

        self.assertEqual(result.firstMessageAt, 1769266800)
        self.assertEqual(result.lastMessageAt, 1769266805)

    def test_no_timestamps_yields_empty_range(self) -> None:
        result = timestamp_range([Message(role="human", content="hi")])
        self.assertIsNone(result.firstMessageAt)
        self.assertIsNone(result.lastMessageAt)

    def test_extract_timestamps_runs_the_agent_mapper(self) -> None:
        raw = json.dumps(
            [
                {"info": {"role": "user", "id": "u", "time": {"created": 1700000000000}}, "parts": [{"type": "text", "text": "hi"}]},
                {"info": {"role": "assistant", "id": "a", "time": {"created": 1700000042500}}, "parts": []},
            ]
        )

        result = extract_timestamps("opencode", raw)

        self.assertEqual(result.firstMessageAt, 1700000000)
        self.assertEqual(result.lastMessageAt, 1700000042)

    def test_unknown_agent_yields_empty_range(self) -> None:
        result = extract_timestamps("cursor", "[]")
        self.assertEqual(result.model_dump(), {"firstMessageAt": None, "lastMessageAt": None})


if __name__ == "__main__":
    unittest.main()
