"""Base classes and shared utilities for LLM providers."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

from commitai.config import LLMProvider, get_api_key_env_var
from commitai.llm.exceptions import LLMError, MissingAPIKeyError
from commitai.settings import Settings


@dataclass
class LLMResult:
    """Result from an LLM generation call, including token usage."""

    message: str
    model: str
    input_tokens: int
    output_tokens: int
    raw_response: str = ""


def clean_response(raw_response: str) -> str:
    """Strip whitespace and markdown code fences from a model reply.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The commit message text.
    """
    cleaned = raw_response.strip()

    # Remove markdown code fences if the model wrapped its answer
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        # Remove first line (```text or ```)
        lines = lines[1:]
        # Remove last line if it's ```
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()

    return cleaned


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Subclasses set ``provider``, ``display_name`` and ``default_model`` and
    implement ``generate``.
    """

    provider: LLMProvider
    display_name: str = ""
    default_model: str = ""

    def __init__(self, settings: Settings, model: str | None = None):
        """Initialize the provider.

        Args:
            settings: Resolved settings (token, limits, timeout, api_url).
            model: Model override. Defaults to settings.model, then the
                provider's default model.
        """
        self.settings = settings
        self.model = model or settings.model or self.default_model
        self.api_key_env_var = get_api_key_env_var(self.provider)

    @abstractmethod
    def generate(self, prompt: str) -> LLMResult:
        """Generate a commit message from a rendered prompt.

        Args:
            prompt: The rendered prompt text.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For other LLM-related errors.
        """
        pass

    def get_api_key(self) -> str:
        """Get the API key for this provider.

        Checks in order:
        1. The api_token setting (CAI_API_TOKEN)
        2. Environment variable
        3. ~/.commitai/credentials file

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        return self._get_api_key_with_fallback(self.api_key_env_var, self.display_name)

    def _get_api_key_with_fallback(self, env_var_name: str, provider_name: str) -> str:
        """Helper to get API key with fallback to credentials file.

        Args:
            env_var_name: Environment variable name to check.
            provider_name: Human-readable provider name for error messages.

        Returns:
            The API key string.

        Raises:
            MissingAPIKeyError: If the API key is not found.
        """
        if self.settings.api_token:
            return self.settings.api_token

        # First check environment variable
        api_key = os.getenv(env_var_name)
        if api_key:
            return api_key

        # Then check credentials file
        from commitai.global_config import get_credential

        api_key = get_credential(env_var_name)
        if api_key:
            return api_key

        # Not found anywhere
        raise MissingAPIKeyError(
            f"{provider_name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var_name}=your_key_here\n"
            f"  2. Run: commit-ai config set-key {self.provider.value}\n"
            f"  3. Manually add to ~/.commitai/credentials"
        )

    def _build_result(self, raw_response: str | None, input_tokens: int, output_tokens: int) -> LLMResult:
        """Clean a reply and wrap it in an LLMResult.

        Raises:
            LLMError: If the reply is empty after cleaning.
        """
        message = clean_response(raw_response or "")
        if not message:
            raise LLMError(f"{self.display_name} returned an empty response")
        return LLMResult(
            message=message,
            model=self.model,
            input_tokens=input_tokens or 0,
            output_tokens=output_tokens or 0,
            raw_response=raw_response or "",
        )
