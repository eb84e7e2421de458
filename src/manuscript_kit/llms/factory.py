# src/manuscript_kit/llms/factory.py

from manuscript_kit.observability.base import MetricsHook, NoOpMetricsHook

from .base import LLMClient
from .config import LLMConfig
from .json_model import JsonModel


def create_llm_client(
    config: LLMConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LLMClient:
    """Create a backend client for the configured provider.

    Provider SDKs are imported lazily, so only the one in use must be
    installed.

    Raises:
        ValueError: If provider is unknown.
        AuthError: If the provider SDK finds no credential.
    """
    kwargs = dict(
        api_key=config.api_key,
        model=config.model,
        timeout=config.timeout,
        max_retries=config.max_retries,
        metrics_hook=metrics_hook,
    )

    if config.provider == "openai":
        from .openai import OpenAILLMClient

        return OpenAILLMClient(**kwargs)

    if config.provider == "anthropic":
        from .anthropic import AnthropicLLMClient

        return AnthropicLLMClient(**kwargs)

    raise ValueError(f"Unknown LLM provider: {config.provider}")


def create_json_model(
    config: LLMConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
    temperature: float = 0.3,
) -> JsonModel:
    """Create the JSON-returning model the analysis pipeline calls.

    Example:
        >>> model = create_json_model(LLMConfig(provider="openai", model="gpt-4o"))
        >>> result = await model.invoke(messages)
    """
    client = create_llm_client(config, metrics_hook)
    return JsonModel(client, temperature=temperature)
