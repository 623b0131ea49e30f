"""Ollama provider implementation.

Ollama serves an OpenAI-compatible API under ``<api_url>/v1``, so the
openai SDK is used as the client.
"""

from openai import OpenAI

from commitai.config import LLMProvider
from commitai.llm.base import BaseLLMProvider, LLMResult
from commitai.llm.exceptions import LLMError

# Ollama ignores the key, but the SDK requires a non-empty one
OLLAMA_PLACEHOLDER_KEY = "ollama"


class OllamaProvider(BaseLLMProvider):
    """Local Ollama server."""

    provider = LLMProvider.OLLAMA
    display_name = "Ollama"
    default_model = "llama2"

    def get_api_key(self) -> str:
        """Ollama needs no key; an api_token setting is passed through if set."""
        return self.settings.api_token or OLLAMA_PLACEHOLDER_KEY

    @property
    def base_url(self) -> str:
        return f"{self.settings.api_url.rstrip('/')}/v1"

    def generate(self, prompt: str) -> LLMResult:
        """Generate a commit message using a local Ollama model.

        Args:
            prompt: The rendered prompt text.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            LLMError: If the server cannot be reached or returns an error.
        """
        client = OpenAI(
            api_key=self.get_api_key(),
            base_url=self.base_url,
            timeout=self.settings.timeout_seconds,
        )

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                messages=[{"role": "user", "content": prompt}],
            )

            raw_response = response.choices[0].message.content

            input_tokens = response.usage.prompt_tokens if response.usage else 0
            output_tokens = response.usage.completion_tokens if response.usage else 0

        except Exception as e:
            raise LLMError(f"Ollama API call failed ({self.base_url}): {e}")

        return self._build_result(raw_response, input_tokens, output_tokens)
