# src/manuscript_kit/llms/anthropic.py

import logging
from time import monotonic
from typing import Any, Literal

import anthropic
from anthropic import NOT_GIVEN, AnthropicError, AsyncAnthropic
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from manuscript_kit.errors import (
    AuthError,
    BackendError,
    BackendTimeoutError,
    NetworkError,
    RateLimitError,
)
from manuscript_kit.observability import names
from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient, LLMResponse, Message, Role, Usage

logger = logging.getLogger(__name__)

# Anthropic has no JSON response mode; the instruction is appended to the system prompt
_JSON_INSTRUCTION = "Respond with a single JSON object and nothing else."


class AnthropicLLMClient(LLMClient):
    """Anthropic LLM client.

    Stateless. Transport-only retries. No behavior.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "claude-sonnet-4-20250514",
        timeout: float = 60.0,
        max_retries: int = 3,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ):
        self._client = AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)
        if self._client.api_key is None and self._client.auth_token is None:
            raise AuthError("Anthropic credential not configured")
        self._model = model
        self._max_retries = max_retries
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized AnthropicLLMClient with model=%s, timeout=%s",
            model,
            timeout,
        )

    async def complete(
        self,
        *,
        messages: list[Message],
        temperature: float = 0.0,
        max_tokens: int | None = None,
        json_mode: bool = False,
    ) -> LLMResponse:
        start = monotonic()

        # Extract system message (Anthropic handles it separately)
        system_content, non_system_messages = self._extract_system(messages)
        if json_mode:
            system_content = (
                f"{system_content}\n\n{_JSON_INSTRUCTION}"
                if system_content
                else _JSON_INSTRUCTION
            )

        anthropic_messages = self._convert_messages(non_system_messages)

        logger.debug(
            "Calling Anthropic: model=%s, messages=%d, json_mode=%s",
            self._model,
            len(messages),
            json_mode,
        )

        try:
            raw = await self._call_api(
                system=system_content,
                messages=anthropic_messages,
                temperature=temperature,
                max_tokens=max_tokens or 4096,  # Anthropic requires max_tokens
            )
        except AnthropicError as e:
            self.metrics_hook.increment(
                names.LLM_ERRORS_TOTAL,
                labels={"provider": "anthropic", "error": type(e).__name__},
            )
            raise _translate_error(e) from e

        elapsed_ms = 1000 * (monotonic() - start)

        # Normalize immediately - provider objects never escape
        response = self._normalize_response(raw, elapsed_ms)

        self.metrics_hook.record_latency(names.LLM_COMPLETION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.LLM_REQUESTS_TOTAL,
            labels={"provider": "anthropic", "model": self._model},
        )
        self.metrics_hook.increment(names.LLM_TOKENS_TOTAL, response.usage.total_tokens)

        logger.info(
            "Anthropic completion: finish=%s, tokens=%d, latency=%.0fms",
            response.finish_reason,
            response.usage.total_tokens,
            elapsed_ms,
        )

        return response

    async def _call_api(
        self,
        *,
        system: str | None,
        messages: list[dict[str, Any]],
        temperature: float,
        max_tokens: int,
    ) -> Any:
        """Call Anthropic API, retrying rate limits and dropped connections."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
            retry=(
                retry_if_exception_type(
                    (anthropic.RateLimitError, anthropic.APIConnectionError)
                )
                & retry_if_not_exception_type(anthropic.APITimeoutError)
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._client.messages.create(
                    model=self._model,
                    messages=messages,  # type: ignore[arg-type]
                    temperature=temperature,
                    max_tokens=max_tokens,
                    system=system if system else NOT_GIVEN,
                )

    def _extract_system(
        self, messages: list[Message]
    ) -> tuple[str | None, list[Message]]:
        """Extract system message from message list.

        Anthropic requires system message as a separate parameter.
        """
        system_content = None
        non_system = []

        for m in messages:
            if m.role == Role.SYSTEM:
                system_content = m.content
            else:
                non_system.append(m)

        return system_content, non_system

    def _convert_messages(self, messages: list[Message]) -> list[dict]:
        return [{"role": m.role.value, "content": m.content} for m in messages]

    def _normalize_response(self, raw: Any, latency_ms: float) -> LLMResponse:
        """Normalize Anthropic response to LLMResponse.

        This is the boundary. Raw provider objects stop here.
        """
        text_parts = [block.text for block in raw.content if block.type == "text"]

        finish_reason: Literal["stop", "length", "error"]
        if raw.stop_reason == "end_turn":
            finish_reason = "stop"
        elif raw.stop_reason == "max_tokens":
            finish_reason = "length"
        else:
            finish_reason = "error"

        return LLMResponse(
            content="".join(text_parts) if text_parts else None,
            finish_reason=finish_reason,
            usage=Usage(
                prompt_tokens=raw.usage.input_tokens,
                completion_tokens=raw.usage.output_tokens,
                total_tokens=raw.usage.input_tokens + raw.usage.output_tokens,
            ),
            latency_ms=latency_ms,
        )


def _translate_error(error: AnthropicError) -> BackendError:
    if isinstance(
        error, (anthropic.AuthenticationError, anthropic.PermissionDeniedError)
    ):
        return AuthError(f"Anthropic rejected the credential: {error}")
    if isinstance(error, anthropic.RateLimitError):
        return RateLimitError(f"Anthropic rate limit persisted after retries: {error}")
    if isinstance(error, anthropic.APITimeoutError):
        return BackendTimeoutError(f"Anthropic request timed out: {error}")
    if isinstance(error, anthropic.APIConnectionError):
        return NetworkError(f"Anthropic connection failed: {error}")
    return BackendError(f"Anthropic error: {error}")
