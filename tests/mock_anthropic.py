"""Mock Anthropic Client — simulates Messages API responses for Oracle and client tests.

Invariants:
    - _Block exposes attributes like Anthropic SDK content blocks
    - MockAnthropicClient sequences responses (one per create_message call)
    - Queued exceptions are raised at their position in the sequence

Design Decisions:
    - Flat mock classes (no inheritance): simple, explicit, easy to debug
"""


class _Block:
    """Mock content block (text, tool_use)."""

    def __init__(self, **kwargs):
        self._data = kwargs
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __repr__(self):
        return f"_Block({self._data})"


class _Usage:
    def __init__(self, input_tokens=100, output_tokens=50):
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens


class _Message:
    """Mock Message returned by messages.create()."""

    def __init__(self, content, stop_reason="tool_use", input_tokens=100, output_tokens=50):
        self.content = content
        self.stop_reason = stop_reason
        self.usage = _Usage(input_tokens, output_tokens)


class MockAnthropicClient:
    """Replaces ResilientAnthropicClient. Sequences pre-configured responses."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    async def create_message(self, **kwargs):
        self.calls.append(kwargs)
        if not self._responses:
            raise RuntimeError("MockAnthropicClient: no response configured")
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


# -- Builder helpers -----------------------------------------------------------


def tool_message(name, tool_input, stop_reason="tool_use"):
    """Response holding a single tool_use block."""
    return _Message(
        [_Block(type="tool_use", id=f"toolu_{name}_test", name=name, input=tool_input)],
        stop_reason,
    )


def text_message(text, stop_reason="end_turn"):
    return _Message([_Block(type="text", text=text)], stop_reason)
