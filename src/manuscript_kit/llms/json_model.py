# src/manuscript_kit/llms/json_model.py

import json
import logging
import re
from typing import Any

from manuscript_kit.errors import MalformedResponseError
from manuscript_kit.observability import names

from .base import LLMClient, Message

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def extract_json(content: str | None) -> Any:
    """Parse the JSON payload of a model response.

    Accepts bare JSON or JSON wrapped in a Markdown code fence.

    Raises:
        MalformedResponseError: If the content is empty or not valid JSON.
    """
    if content is None or not content.strip():
        raise MalformedResponseError("Backend returned an empty response")

    text = content.strip()
    fenced = _FENCE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Backend response is not valid JSON: {e}") from e


class JsonModel:
    """Opaque `invoke(messages) -> JSON` call on top of an LLMClient.

    Every failure surfaces as a BackendError subclass.
    """

    def __init__(
        self,
        client: LLMClient,
        temperature: float = 0.3,
        max_tokens: int | None = None,
    ) -> None:
        self._client = client
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def invoke(
        self, messages: list[Message], temperature: float | None = None
    ) -> Any:
        response = await self._client.complete(
            messages=messages,
            temperature=self._temperature if temperature is None else temperature,
            max_tokens=self._max_tokens,
            json_mode=True,
        )
        if response.finish_reason == "length":
            logger.warning("Backend response was truncated at the token limit")

        try:
            return extract_json(response.content)
        except MalformedResponseError:
            self._client.metrics_hook.increment(names.LLM_MALFORMED_RESPONSES_TOTAL)
            raise
