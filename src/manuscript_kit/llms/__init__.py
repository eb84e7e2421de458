# src/manuscript_kit/llms/__init__.py

"""Backend model client layer for manuscript-kit.

Provides a thin, stateless abstraction over LLM providers and the
JSON invocation the analysis pipeline builds on.

Example:
    >>> from manuscript_kit.llms import LLMConfig, Message, Role
    >>> from manuscript_kit.llms import create_json_model
    >>>
    >>> config = LLMConfig(provider="openai", model="gpt-4o")
    >>> model = create_json_model(config)
    >>>
    >>> result = await model.invoke(
    ...     [Message(role=Role.USER, content='Reply with {"ok": true}')]
    ... )
"""

from .base import LLMClient, LLMResponse, Message, Role, Usage
from .config import LLMConfig
from .factory import create_json_model, create_llm_client
from .json_model import JsonModel, extract_json

__all__ = [
    # Factory
    "create_llm_client",
    "create_json_model",
    # Protocol
    "LLMClient",
    # Config
    "LLMConfig",
    # JSON invocation
    "JsonModel",
    "extract_json",
    # Types
    "Message",
    "Role",
    "LLMResponse",
    "Usage",
]
