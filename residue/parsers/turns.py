"""Turn assembly and tool-result matching for canonical transcripts."""
from __future__ import annotations

from typing import Any, Optional

from residue.models import Message, ThinkingBlock, ToolCall

ERROR_PREFIX = "[ERROR] "

# Turn identity before any assistant entry has been seen. Distinct from None,
# which is a started turn whose entries carry no message id.
_UNSET: Any = object()

ToolHandle = tuple[int, int]


class ToolMatcher:
    """Pending tool calls keyed by call id, resolved at most once each."""

    def __init__(self) -> None:
        self._pending: dict[str, ToolHandle] = {}

    def register(self, call_id: Any, handle: ToolHandle) -> None:
        if isinstance(call_id, str) and call_id:
            self._pending[call_id] = handle

    def pop(self, call_id: Any) -> Optional[ToolHandle]:
        if not isinstance(call_id, str) or not call_id:
            return None
        return self._pending.pop(call_id, None)

    def __len__(self) -> int:
        return len(self._pending)


class TurnAssembler:
    """Single forward pass that merges same-turn entries into Messages.

    Assistant messages are placed in the output list as soon as their turn
    starts, so tool-call handles `(message_index, tool_call_index)` remain
    valid after the turn is flushed. Results that arrive later fill in the
    referenced ToolCall in place; the list is settled once `finish` returns.
    """

    def __init__(self) -> None:
        self.messages: list[Message] = []
        self.matcher = ToolMatcher()
        self._turn_id: Any = _UNSET
        self._current: Optional[int] = None
        self._model: Optional[str] = None

    def flush(self) -> None:
        if self._current is None:
            return
        message = self.messages[self._current]
        if message.content.startswith("\n"):
            message.content = message.content[1:]
        if self._model:
            message.model = self._model
        self._current = None
        self._turn_id = _UNSET
        self._model = None

    def add_human(self, text: str, timestamp: Optional[str] = None) -> None:
        self.flush()
        self.messages.append(Message(role="human", content=text, timestamp=timestamp))

    def begin_assistant(
        self,
        turn_id: Any,
        timestamp: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        """Continue the current turn if `turn_id` matches, else start a new one."""
        if self._current is None or turn_id != self._turn_id:
            self.flush()
            self._turn_id = turn_id
            self.messages.append(Message(role="assistant", content="", timestamp=timestamp))
            self._current = len(self.messages) - 1
        if isinstance(model, str) and model:
            self._model = model

    def _message(self) -> Message:
        if self._current is None:
            self.begin_assistant(None)
        return self.messages[self._current]

    def add_text(self, text: str) -> None:
        message = self._message()
        if message.content:
            message.content = f"{message.content}\n{text}"
        else:
            message.content = text

    def add_thinking(self, text: str) -> None:
        message = self._message()
        if message.thinking is None:
            message.thinking = []
        message.thinking.append(ThinkingBlock(content=text))

    def add_tool_call(self, name: str, tool_input: str, call_id: Any = None) -> ToolHandle:
        message = self._message()
        if message.tool_calls is None:
            message.tool_calls = []
        message.tool_calls.append(ToolCall(name=name, input=tool_input, output=""))
        handle = (self._current, len(message.tool_calls) - 1)
        self.matcher.register(call_id, handle)
        return handle

    def set_tool_output(
        self,
        handle: ToolHandle,
        output: str,
        is_error: bool = False,
        error_prefix: str = ERROR_PREFIX,
    ) -> None:
        message_index, call_index = handle
        tool_calls = self.messages[message_index].tool_calls or []
        if 0 <= call_index < len(tool_calls):
            tool_calls[call_index].output = f"{error_prefix}{output}" if is_error else output

    def resolve_tool_result(
        self,
        call_id: Any,
        output: str,
        is_error: bool = False,
        error_prefix: str = ERROR_PREFIX,
    ) -> bool:
        """Fill in a pending call's output. Unknown or consumed ids are ignored."""
        handle = self.matcher.pop(call_id)
        if handle is None:
            return False
        self.set_tool_output(handle, output, is_error=is_error, error_prefix=error_prefix)
        return True

    def finish(self) -> list[Message]:
        self.flush()
        return self.messages
