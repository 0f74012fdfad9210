"""
LiteLLM client wrapper used as the model gateway.

Every model round-trip in Toolpilot goes through ``LLMClient.send``, which
retries rate-limited calls with exponential backoff and reports whether the
model stopped because it ran out of tokens.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import litellm
from pydantic import BaseModel, Field
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from toolpilot.core.audit import AuditLog
from toolpilot.core.errors import TransientUpstreamError
from toolpilot.models.config import LLMConfig
from toolpilot.utils.logger import get_logger

# Suppress LiteLLM's verbose logging
litellm.suppress_debug_info = True

logger = get_logger(__name__)

# First backoff delay in seconds; doubles on every retry
BASE_DELAY = 0.5

TRUNCATED = "max_tokens"

CompletionFn = Callable[..., Awaitable[Any]]
SleepFn = Callable[[float], Awaitable[None]]


class ModelReply(BaseModel):
    """Text and stop reason of one model response."""

    text: str = Field(default="")
    stop_reason: str | None = Field(default=None)
    content_type: str = Field(default="text")

    @property
    def truncated(self) -> bool:
        """Whether the model stopped at the token ceiling."""
        return self.stop_reason == TRUNCATED


def is_rate_limit_error(exc: BaseException) -> bool:
    """
    Check whether an exception signals provider rate limiting.

    Recognizes LiteLLM's ``RateLimitError``, any error carrying HTTP status
    429 (directly or on its ``response``), and error bodies whose type is
    ``rate_limit_error`` or whose message mentions a rate limit.
    """
    if isinstance(exc, litellm.RateLimitError):
        return True

    status = getattr(exc, "status_code", None) or getattr(exc, "status", None)
    response = getattr(exc, "response", None)
    if status is None and response is not None:
        status = getattr(response, "status_code", None) or getattr(response, "status", None)
    if str(status) == "429":
        return True

    body = getattr(exc, "body", None) or getattr(exc, "error", None)
    if isinstance(body, dict):
        if isinstance(body.get("error"), dict):
            body = body["error"]
        if body.get("type") == "rate_limit_error":
            return True
        message = body.get("message")
        if isinstance(message, str) and "rate limit" in message.lower():
            return True

    return False


class LLMClient:
    """
    Multi-provider model gateway using LiteLLM.

    Only rate-limit failures are retried. The n-th retry waits
    ``0.5 * 2 ** (n - 1)`` seconds and is announced by one log line.

    Example:
        >>> client = LLMClient(LLMConfig(provider="anthropic"))
        >>> reply = await client.send([{"role": "user", "content": "Hello!"}], max_tokens=64)
        >>> reply.text
        "Hello! How can I help you today?"
    """

    def __init__(
        self,
        config: LLMConfig,
        completion: CompletionFn | None = None,
        sleep: SleepFn | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: LLM configuration including provider, model, and settings
            completion: Async completion callable (defaults to ``litellm.acompletion``)
            sleep: Async sleep used between retries (defaults to ``asyncio.sleep``)
        """
        self.config = config
        self.model_string = config.get_model_string()
        self.max_retries = config.max_retries
        self._completion = completion or litellm.acompletion
        self._sleep = sleep or asyncio.sleep

        # Token and cost tracking
        self.total_prompt_tokens = 0
        self.total_completion_tokens = 0
        self.total_tokens = 0
        self.total_cost = 0.0

    def _track_usage(self, response: Any) -> None:
        """Track token usage and cost from response."""
        usage = getattr(response, "usage", None)
        if not usage:
            return

        prompt_tokens = getattr(usage, "prompt_tokens", 0) or 0
        completion_tokens = getattr(usage, "completion_tokens", 0) or 0

        self.total_prompt_tokens += prompt_tokens
        self.total_completion_tokens += completion_tokens
        self.total_tokens += prompt_tokens + completion_tokens

        try:
            self.total_cost += litellm.completion_cost(completion_response=response)
        except Exception:
            # Cost calculation not available for all models
            pass

    def _before_sleep(self, audit: AuditLog | None) -> Callable[[RetryCallState], None]:
        def announce(retry_state: RetryCallState) -> None:
            delay_ms = int(round(retry_state.next_action.sleep * 1000))
            message = (
                f"Rate limit detected from model provider, retrying in {delay_ms}ms "
                f"(attempt {retry_state.attempt_number}/{self.max_retries})"
            )
            if audit is not None:
                audit.warning(message)
            else:
                logger.warning(message)

        return announce

    async def send(
        self,
        messages: list[dict[str, str]],
        max_tokens: int,
        model: str | None = None,
        audit: AuditLog | None = None,
        **kwargs: Any,
    ) -> ModelReply:
        """
        Send a message batch to the model.

        Args:
            messages: Non-empty list of message dicts with 'role' and 'content'
            max_tokens: Token ceiling for the reply
            model: Override the configured model string
            audit: Audit log receiving retry lines
            **kwargs: Additional arguments passed to LiteLLM

        Returns:
            ModelReply with the text and stop reason

        Raises:
            ValueError: If messages is empty or max_tokens is not positive
            TransientUpstreamError: If rate limiting outlasts the retries
        """
        if not messages:
            raise ValueError("messages must not be empty")
        if not isinstance(max_tokens, int) or max_tokens <= 0:
            raise ValueError("max_tokens must be a positive integer")

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=BASE_DELAY, exp_base=2),
            retry=retry_if_exception(is_rate_limit_error),
            before_sleep=self._before_sleep(audit),
            sleep=self._sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._completion(
                        model=model or self.model_string,
                        messages=messages,
                        max_tokens=max_tokens,
                        temperature=self.config.temperature,
                        timeout=self.config.timeout,
                        api_key=self.config.get_api_key(),
                        api_base=self.config.api_base,
                        **kwargs,
                    )
        except Exception as e:
            if is_rate_limit_error(e):
                raise TransientUpstreamError(
                    f"Model provider is rate limiting requests: {e}",
                    attempts=self.max_retries + 1,
                ) from e
            raise

        self._track_usage(response)
        return self._to_reply(response)

    @staticmethod
    def _to_reply(response: Any) -> ModelReply:
        """Extract text and stop reason from a chat completion response."""
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ModelReply(content_type="empty")

        choice = choices[0]
        message = getattr(choice, "message", None)
        content = getattr(message, "content", None)
        finish_reason = getattr(choice, "finish_reason", None)

        stop_reason = TRUNCATED if finish_reason in ("length", TRUNCATED) else finish_reason

        if isinstance(content, str):
            return ModelReply(text=content, stop_reason=stop_reason)

        content_type = "tool_use" if getattr(message, "tool_calls", None) else "empty"
        return ModelReply(stop_reason=stop_reason, content_type=content_type)

    def get_usage_stats(self) -> dict[str, Any]:
        """
        Get current usage statistics.

        Returns:
            Dictionary with token counts and cost
        """
        return {
            "prompt_tokens": self.total_prompt_tokens,
            "completion_tokens": self.total_completion_tokens,
            "total_tokens": self.total_tokens,
            "total_cost_usd": round(self.total_cost, 6),
            "model": self.model_string,
        }

    def reset_usage(self) -> None:
        """Reset usage tracking counters."""
        self.total_prompt_tokens = 0
        self.total_completion_tokens = 0
        self.total_tokens = 0
        self.total_cost = 0.0
