"""Oracle — structured judgment calls to Claude, one typed answer per question.

Invariants:
    - ask() returns an instance of response_model or raises OracleCallError
    - Every call forces a single tool whose input_schema is response_model's JSON schema
    - Every call is bounded by call_timeout_seconds (timeout -> OracleCallError "timeout")
    - asyncio.CancelledError propagates untouched
    - Templates are fixed at construction; the Oracle holds no per-call state

Design Decisions:
    - Explicitly constructed and injected into each algorithm (no module singleton);
      the FastAPI app builds one in its lifespan
    - Forced tool_use over free-text JSON: the API guarantees an object shaped by the
      schema, and pydantic re-validates it
    - error_type vocabulary: timeout, rate_limit, connection_error, client_error,
      refusal, malformed_output
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from argument_forge.config import Settings
from argument_forge.core.domain_types import OracleTask
from argument_forge.core.errors import ErrorContext, OracleCallError
from argument_forge.infrastructure.anthropic_client import ResilientAnthropicClient
from argument_forge.services.prompt_templates import DEFAULT_TEMPLATES, PromptTemplate

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def tool_name_for(task: OracleTask) -> str:
    return f"submit_{task.value}"


def build_answer_tool(task: OracleTask, response_model: type[BaseModel]) -> dict:
    """Tool definition whose input is the answer itself."""
    return {
        "name": tool_name_for(task),
        "description": f"Submit the structured answer for {task.value}.",
        "input_schema": response_model.model_json_schema(),
    }


def parse_answer(
    response, task: OracleTask, response_model: type[ResponseT],
    context: ErrorContext,
) -> ResponseT:
    """Extract and validate the forced tool_use block."""
    if getattr(response, "stop_reason", None) == "refusal":
        raise OracleCallError("oracle refused to answer", "refusal", context=context)

    expected = tool_name_for(task)
    for block in response.content:
        if getattr(block, "type", None) == "tool_use" and block.name == expected:
            try:
                return response_model.model_validate(block.input)
            except ValidationError as e:
                context.debug_info = {"errors": e.errors(include_url=False)}
                raise OracleCallError(
                    f"answer does not match {response_model.__name__}",
                    "malformed_output", context=context,
                ) from e

    raise OracleCallError(
        f"no {expected} tool_use block in response",
        "malformed_output", context=context,
    )


class Oracle:
    """Renders a task template, asks Claude, returns the typed answer."""

    def __init__(
        self,
        client: ResilientAnthropicClient,
        model: str,
        max_tokens: int = 16_000,
        call_timeout_seconds: float = 600.0,
        templates: Mapping[OracleTask, PromptTemplate] = DEFAULT_TEMPLATES,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.call_timeout_seconds = call_timeout_seconds
        self._templates = templates

    @classmethod
    def from_settings(cls, settings: Settings) -> "Oracle":
        client = ResilientAnthropicClient(
            api_key=settings.anthropic_api_key,
            max_retries=settings.anthropic_max_retries,
            base_delay_ms=settings.anthropic_base_delay_ms,
            max_delay_ms=settings.anthropic_max_delay_ms,
            timeout_seconds=settings.anthropic_timeout_seconds,
        )
        return cls(
            client,
            model=settings.oracle_model,
            max_tokens=settings.oracle_max_tokens,
            call_timeout_seconds=settings.oracle_call_timeout_seconds,
        )

    async def ask(
        self,
        task: OracleTask,
        inputs: dict[str, str],
        response_model: type[ResponseT],
    ) -> ResponseT:
        template = self._templates[task]
        context = ErrorContext(task=task.value)
        tool = build_answer_tool(task, response_model)
        try:
            async with asyncio.timeout(self.call_timeout_seconds):
                response = await self.client.create_message(
                    model=self.model,
                    max_tokens=self.max_tokens,
                    system=template.system,
                    tools=[tool],
                    tool_choice={"type": "tool", "name": tool["name"]},
                    messages=[{"role": "user", "content": template.render(inputs)}],
                    context=context,
                )
        except TimeoutError as e:
            raise OracleCallError(
                f"no answer within {self.call_timeout_seconds}s",
                "timeout", context=context,
            ) from e

        answer = parse_answer(response, task, response_model, context)
        logger.debug("Oracle answered", extra={"task": task.value})
        return answer
