import json
import unittest

from residue.parsers.entries import (
    parse_json_array,
    parse_jsonl_entries,
    render_tool_input,
    text_from_content,
)


class JsonlEntryParserTests(unittest.TestCase):
    def test_blank_and_malformed_lines_are_skipped(self) -> None:
        raw = "\n".join(
            [
                json.dumps({"type": "user", "uuid": "u1"}),
                "",
                "not valid json {{{",
                "   ",
                json.dumps({"type": "assistant", "uuid": "a1"}),
            ]
        )

        entries = parse_jsonl_entries(raw)

        self.assertEqual([entry["uuid"] for entry in entries], ["u1", "a1"])

    def test_non_object_lines_are_dropped(self) -> None:
        raw = "\n".join(["42", '"text"', "[1, 2]", json.dumps({"type": "user"})])
        self.assertEqual(parse_jsonl_entries(raw), [{"type": "user"}])

    def test_degenerate_inputs_yield_no_entries(self) -> None:
        self.assertEqual(parse_jsonl_entries(""), [])
        self.assertEqual(parse_jsonl_entries(" \n\t\n"), [])


class JsonArrayParserTests(unittest.TestCase):
    def test_array_of_objects_is_returned_in_order(self) -> None:
        raw = json.dumps([{"info": {"id": "m1"}}, {"info": {"id": "m2"}}])
        entries = parse_json_array(raw)
        self.assertEqual([entry["info"]["id"] for entry in entries], ["m1", "m2"])

    def test_invalid_or_non_array_documents_yield_no_entries(self) -> None:
        self.assertEqual(parse_json_array("not json"), [])
        self.assertEqual(parse_json_array("{broken"), [])
        self.assertEqual(parse_json_array('{"info": {}}'), [])
        self.assertEqual(parse_json_array("[]"), [])
        self.assertEqual(parse_json_array(""), [])


class ContentHelperTests(unittest.TestCase):
    def test_string_content_is_verbatim(self) -> None:
        self.assertEqual(text_from_content("  hello  "), "  hello  ")

    def test_block_content_keeps_non_empty_text_blocks(self) -> None:
        content = [
            {"type": "text", "text": "part one"},
            {"type": "image", "data": "..."},
            {"type": "text", "text": ""},
            "stray",
            {"type": "text", "text": "part two"},
        ]
        self.assertEqual(text_from_content(content), "part one\npart two")

    def test_missing_content_is_empty(self) -> None:
        self.assertEqual(text_from_content(None), "")
        self.assertEqual(text_from_content({"type": "text"}), "")

    def test_tool_input_is_pretty_printed(self) -> None:
        rendered = render_tool_input({"command": "ls -la", "path": "café"})
        self.assertEqual(rendered, '{\n  "command": "ls -la",\n  "path": "café"\n}')
        self.assertEqual(render_tool_input(None), "{}")


if __name__ == "__main__":
    unittest.main()
