import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from residue.parsers.platforms import registry
from residue.parsers.platforms.registry import (
    get_mapper,
    list_agents,
    map_session_file,
    map_transcript,
)


def _claude_session() -> str:
    return "\n".join(
        json.dumps(line)
        for line in [
            {"type": "user", "uuid": "u1", "parentUuid": None, "message": {"role": "user", "content": "hi"}},
            {
                "type": "assistant",
                "uuid": "a1",
                "parentUuid": "u1",
                "message": {"id": "msg_1", "role": "assistant", "content": [{"type": "text", "text": "hello"}]},
            },
        ]
    )


class MapperRegistryTests(unittest.TestCase):
    def test_known_agents_are_registered(self) -> None:
        self.assertEqual(list_agents(), ["claude-code", "opencode", "pi"])
        for agent in list_agents():
            self.assertIsNotNone(get_mapper(agent))

    def test_unknown_agent_has_no_mapper(self) -> None:
        self.assertIsNone(get_mapper("cursor"))
        self.assertIsNone(map_transcript("cursor", _claude_session()))

    def test_every_mapper_degrades_to_empty_for_bad_input(self) -> None:
        for agent in list_agents():
            mapper = get_mapper(agent)
            assert mapper is not None
            for raw in ("", "   ", "[]", "{broken", "null"):
                self.assertEqual(mapper(raw), [], f"{agent}: {raw!r}")

    def test_map_transcript_dispatches_by_agent(self) -> None:
        messages = map_transcript("claude-code", _claude_session())
        assert messages is not None
        self.assertEqual([m.content for m in messages], ["hi", "hello"])

    def test_unexpected_mapper_failure_is_contained(self) -> None:
        def broken(raw: str):
            raise RuntimeError("boom")

        wrapped = registry._total("broken", broken)
        with self.assertLogs("residue.parsers", level="ERROR"):
            self.assertEqual(wrapped("[1]"), [])


class SessionFileTests(unittest.TestCase):
    def _write(self, text: str, name: str = "session.jsonl") -> Path:
        tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(tmpdir.cleanup)
        path = Path(tmpdir.name) / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_session_file_is_read_and_mapped(self) -> None:
        messages = map_session_file("claude-code", self._write(_claude_session()))
        assert messages is not None
        self.assertEqual(len(messages), 2)

    def test_oversized_session_file_is_refused(self) -> None:
        path = self._write(_claude_session())
        with patch.object(registry.config, "MAX_TRANSCRIPT_BYTES", 10):
            with self.assertLogs("residue.parsers", level="WARNING"):
                self.assertEqual(map_session_file("claude-code", path), [])

    def test_missing_session_file_maps_to_nothing(self) -> None:
        with self.assertLogs("residue.parsers", level="WARNING"):
            self.assertEqual(map_session_file("pi", Path("/nonexistent/session.jsonl")), [])

    def test_unknown_agent_file_returns_none(self) -> None:
        self.assertIsNone(map_session_file("cursor", self._write("{}")))


if __name__ == "__main__":
    unittest.main()
