"""Text-generation provider registry."""

from ..config import Config
from ..exceptions import ConfigError
from .anthropic import AnthropicProvider
from .base import LLMProvider
from .openai import OpenAIProvider

_PROVIDERS: dict[str, tuple[type[LLMProvider], str]] = {
    "claude": (AnthropicProvider, "anthropic_api_key"),
    "openai": (OpenAIProvider, "openai_api_key"),
}

PROVIDER_NAMES = tuple(_PROVIDERS)


def get_llm_provider(config: Config) -> LLMProvider:
    """Build the provider named by ``config.llm_provider``.

    Raises ConfigError for a provider name with no registered class.
    """
    try:
        cls, key_attr = _PROVIDERS[config.llm_provider]
    except KeyError:
        raise ConfigError(
            f"Unknown LLM provider: {config.llm_provider}. "
            f"Use one of: {', '.join(PROVIDER_NAMES)}."
        ) from None
    return cls(api_key=getattr(config, key_attr), model=config.default_model)


__all__ = ["AnthropicProvider", "LLMProvider", "OpenAIProvider", "PROVIDER_NAMES", "get_llm_provider"]
