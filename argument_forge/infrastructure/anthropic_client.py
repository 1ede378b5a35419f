"""Resilient Anthropic Client — one forced-tool Messages call, retried on transient failures.

Invariants:
    - Every SDK failure is classified once (classify_api_error) into an oracle
      error_type plus a retryable flag
    - Retryable: rate_limit (429), overloaded (529), 5xx, connection errors;
      at most max_retries retries, then OracleCallError with the last error_type
    - Not retryable: timeout and every other 4xx, raised on first occurrence
    - Retry-After (seconds) overrides the computed backoff for rate limits
    - asyncio.CancelledError is never caught here

Design Decisions:
    - The SDK's own retries are disabled (max_retries=0): one retry policy, here
    - Exponential backoff with ±25% jitter, capped at max_delay_ms
    - Classification is a pure function, testable without any transport
"""

import asyncio
import logging
import random

import anthropic
from anthropic import (
    APIConnectionError,
    APIError,
    APIStatusError,
    APITimeoutError,
    RateLimitError,
)

from argument_forge.core.errors import ErrorContext, OracleCallError

logger = logging.getLogger(__name__)

_OVERLOADED = 529


def classify_api_error(error: APIError) -> tuple[str, bool]:
    """Map an SDK error to (error_type, retryable)."""
    if isinstance(error, APITimeoutError):
        return "timeout", False
    if isinstance(error, RateLimitError):
        return "rate_limit", True
    if isinstance(error, APIConnectionError):
        return "connection_error", True
    if isinstance(error, APIStatusError):
        if error.status_code == _OVERLOADED or error.status_code >= 500:
            return "connection_error", True
    return "client_error", False


def retry_after_ms(error: APIError) -> int | None:
    """Retry-After header in milliseconds, when the server sent whole seconds."""
    response = getattr(error, "response", None)
    if response is None:
        return None
    value = response.headers.get("retry-after")
    if value and value.isdigit():
        return int(value) * 1000
    return None


class ResilientAnthropicClient:
    """AsyncAnthropic behind a single retry policy and OracleCallError mapping."""

    def __init__(
        self,
        api_key: str,
        max_retries: int = 3,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 60_000,
        timeout_seconds: int = 300,
    ):
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key, timeout=timeout_seconds, max_retries=0,
        )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        system: str,
        tools: list,
        messages: list,
        tool_choice: dict | None = None,
        context: ErrorContext | None = None,
    ):
        request = {
            "model": model,
            "max_tokens": max_tokens,
            "system": system,
            "tools": tools,
            "messages": messages,
        }
        if tool_choice is not None:
            request["tool_choice"] = tool_choice
        task = context.task if context else None

        attempt = 0
        while True:
            try:
                response = await self.client.messages.create(**request)
            except APIError as e:
                error_type, retryable = classify_api_error(e)
                wait_ms = retry_after_ms(e) if error_type == "rate_limit" else None
                if not retryable or attempt >= self.max_retries:
                    raise OracleCallError(
                        str(e), error_type,
                        retry_after_ms=wait_ms, context=context,
                    ) from e
                delay_ms = wait_ms or self._backoff(attempt)
                attempt += 1
                logger.warning(
                    f"Anthropic {error_type}, retry {attempt}/{self.max_retries} "
                    f"in {delay_ms}ms",
                    extra={"task": task, "attempt": attempt},
                )
                await asyncio.sleep(delay_ms / 1000)
                continue

            usage = response.usage
            logger.info(
                "Anthropic call succeeded",
                extra={
                    "task": task,
                    "attempt": attempt + 1,
                    "input_tokens": usage.input_tokens,
                    "output_tokens": usage.output_tokens,
                },
            )
            return response

    async def close(self) -> None:
        await self.client.close()

    def _backoff(self, attempt: int) -> int:
        delay = min(self.max_delay_ms, self.base_delay_ms * 2 ** attempt)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311
