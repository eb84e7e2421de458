# tests/unit/llms/test_anthropic_client.py

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest

from manuscript_kit.errors import AuthError, RateLimitError
from manuscript_kit.llms.anthropic import AnthropicLLMClient
from manuscript_kit.llms.base import Message, Role

_REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


@pytest.fixture
def mock_anthropic_response() -> MagicMock:
    """Create a mock Anthropic response."""
    response = MagicMock()

    text_block = MagicMock()
    text_block.type = "text"
    text_block.text = '{"citations": []}'

    response.content = [text_block]
    response.stop_reason = "end_turn"
    response.usage.input_tokens = 10
    response.usage.output_tokens = 8
    return response


def make_client(create: AsyncMock, **kwargs) -> AnthropicLLMClient:
    with patch("manuscript_kit.llms.anthropic.AsyncAnthropic") as mock_anthropic:
        mock_client = MagicMock()
        mock_client.messages.create = create
        mock_anthropic.return_value = mock_client
        return AnthropicLLMClient(api_key="test-key", **kwargs)


class TestAnthropicLLMClient:
    @pytest.mark.asyncio
    async def test_complete_basic(self, mock_anthropic_response: MagicMock) -> None:
        client = make_client(AsyncMock(return_value=mock_anthropic_response))

        response = await client.complete(
            messages=[Message(role=Role.USER, content="Hello!")]
        )

        assert response.content == '{"citations": []}'
        assert response.finish_reason == "stop"
        assert response.usage.total_tokens == 18

    @pytest.mark.asyncio
    async def test_system_message_is_extracted(
        self, mock_anthropic_response: MagicMock
    ) -> None:
        create = AsyncMock(return_value=mock_anthropic_response)
        client = make_client(create)

        await client.complete(
            messages=[
                Message(role=Role.SYSTEM, content="Check citations."),
                Message(role=Role.USER, content="Text"),
            ]
        )

        kwargs = create.call_args.kwargs
        assert kwargs["system"] == "Check citations."
        assert kwargs["messages"] == [{"role": "user", "content": "Text"}]
        assert kwargs["max_tokens"] == 4096

    @pytest.mark.asyncio
    async def test_json_mode_extends_system_prompt(
        self, mock_anthropic_response: MagicMock
    ) -> None:
        create = AsyncMock(return_value=mock_anthropic_response)
        client = make_client(create)

        await client.complete(
            messages=[
                Message(role=Role.SYSTEM, content="Check citations."),
                Message(role=Role.USER, content="Text"),
            ],
            json_mode=True,
        )

        system = create.call_args.kwargs["system"]
        assert system.startswith("Check citations.")
        assert "JSON" in system

    @pytest.mark.asyncio
    async def test_max_tokens_stop_reason(
        self, mock_anthropic_response: MagicMock
    ) -> None:
        mock_anthropic_response.stop_reason = "max_tokens"
        client = make_client(AsyncMock(return_value=mock_anthropic_response))

        response = await client.complete(messages=[Message(role=Role.USER, content="x")])

        assert response.finish_reason == "length"

    @pytest.mark.asyncio
    async def test_rate_limit_exhausted(self) -> None:
        error = anthropic.RateLimitError(
            "slow down", response=httpx.Response(429, request=_REQUEST), body=None
        )
        client = make_client(AsyncMock(side_effect=error), max_retries=1)

        with pytest.raises(RateLimitError):
            await client.complete(messages=[Message(role=Role.USER, content="x")])

    def test_missing_credential_raises_auth_error(self) -> None:
        with patch("manuscript_kit.llms.anthropic.AsyncAnthropic") as mock_anthropic:
            mock_anthropic.return_value.api_key = None
            mock_anthropic.return_value.auth_token = None

            with pytest.raises(AuthError):
                AnthropicLLMClient()
