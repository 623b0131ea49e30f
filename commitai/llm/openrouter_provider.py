"""OpenRouter provider implementation.

OpenRouter provides unified access to many hosted models through a single
OpenAI-compatible API.
"""

from openai import OpenAI

from commitai.config import LLMProvider
from commitai.llm.base import BaseLLMProvider, LLMResult
from commitai.llm.exceptions import LLMError

# OpenRouter API base URL
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenRouterProvider(BaseLLMProvider):
    """OpenRouter LLM provider."""

    provider = LLMProvider.OPENROUTER
    display_name = "OpenRouter"
    default_model = "anthropic/claude-sonnet-4"

    def generate(self, prompt: str) -> LLMResult:
        """Generate a commit message using OpenRouter.

        Model names use the ``vendor/model`` form (e.g. ``openai/gpt-4o``).

        Args:
            prompt: The rendered prompt text.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For other LLM-related errors.
        """
        api_key = self.get_api_key()

        client = OpenAI(
            api_key=api_key,
            base_url=OPENROUTER_BASE_URL,
            timeout=self.settings.timeout_seconds,
        )

        try:
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                messages=[{"role": "user", "content": prompt}],
                extra_headers={
                    "X-Title": "commit-ai",
                },
            )

            raw_response = response.choices[0].message.content

            input_tokens = response.usage.prompt_tokens if response.usage else 0
            output_tokens = response.usage.completion_tokens if response.usage else 0

        except Exception as e:
            raise LLMError(f"OpenRouter API call failed: {e}")

        return self._build_result(raw_response, input_tokens, output_tokens)
