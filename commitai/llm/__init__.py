"""LLM provider module for commit-ai.

This module provides a unified interface to multiple text-generation
backends. The active provider and model come from the resolved Settings.
"""

from dotenv import load_dotenv

from commitai.config import LLMProvider
from commitai.llm.base import BaseLLMProvider, LLMResult, clean_response
from commitai.llm.exceptions import LLMError, MissingAPIKeyError
from commitai.settings import Settings

# Load environment variables from .env file
load_dotenv()


def get_provider(
    settings: Settings,
    provider: LLMProvider | None = None,
    model: str | None = None,
) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        settings: Resolved settings.
        provider: The provider to use. Defaults to settings.provider.
        model: The model to use. Defaults to settings.model.

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    if provider is None:
        provider = settings.llm_provider

    if provider == LLMProvider.OLLAMA:
        from commitai.llm.ollama_provider import OllamaProvider

        return OllamaProvider(settings, model=model)

    elif provider == LLMProvider.OPENAI:
        from commitai.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(settings, model=model)

    elif provider == LLMProvider.ANTHROPIC:
        from commitai.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(settings, model=model)

    elif provider == LLMProvider.GOOGLE:
        from commitai.llm.google_provider import GoogleProvider

        return GoogleProvider(settings, model=model)

    elif provider == LLMProvider.GROQ:
        from commitai.llm.groq_provider import GroqProvider

        return GroqProvider(settings, model=model)

    elif provider == LLMProvider.OPENROUTER:
        from commitai.llm.openrouter_provider import OpenRouterProvider

        return OpenRouterProvider(settings, model=model)

    else:
        raise ValueError(f"Unsupported provider: {provider}")


def generate_commit_message(settings: Settings, prompt: str) -> LLMResult:
    """Generate a commit message from a rendered prompt.

    This is the main entry point for generation. It uses the provider and
    model from ``settings``.

    Args:
        settings: Resolved settings.
        prompt: The rendered prompt text.

    Returns:
        An LLMResult containing the cleaned message and token usage.

    Raises:
        ConfigError: If the configured provider is unknown.
        MissingAPIKeyError: If the API key is not set.
        LLMError: For other LLM-related errors.
    """
    provider = get_provider(settings)
    return provider.generate(prompt)


# Export commonly used items
__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "MissingAPIKeyError",
    "LLMResult",
    "clean_response",
    "get_provider",
    "generate_commit_message",
]
