"""Groq provider implementation."""

from groq import Groq

from commitai.config import LLMProvider
from commitai.llm.base import BaseLLMProvider, LLMResult
from commitai.llm.exceptions import LLMError


class GroqProvider(BaseLLMProvider):
    """Groq LLM provider (fast inference for open-source models)."""

    provider = LLMProvider.GROQ
    display_name = "Groq"
    default_model = "llama-3.3-70b-versatile"

    def generate(self, prompt: str) -> LLMResult:
        """Generate a commit message using Groq.

        Args:
            prompt: The rendered prompt text.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For other LLM-related errors.
        """
        api_key = self.get_api_key()

        client = Groq(api_key=api_key, timeout=self.settings.timeout_seconds)

        try:
            # Call the Groq API (OpenAI-compatible)
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
            raise LLMError(f"Groq API call failed: {e}")

        return self._build_result(raw_response, input_tokens, output_tokens)
