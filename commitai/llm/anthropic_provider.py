"""Anthropic Claude provider implementation."""

from anthropic import Anthropic

from commitai.config import LLMProvider
from commitai.llm.base import BaseLLMProvider, LLMResult
from commitai.llm.exceptions import LLMError


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    provider = LLMProvider.ANTHROPIC
    display_name = "Anthropic"
    default_model = "claude-sonnet-4-20250514"

    def generate(self, prompt: str) -> LLMResult:
        """Generate a commit message using Anthropic Claude.

        Args:
            prompt: The rendered prompt text.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For other LLM-related errors.
        """
        api_key = self.get_api_key()

        client = Anthropic(api_key=api_key, timeout=self.settings.timeout_seconds)

        try:
            message = client.messages.create(
                model=self.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                messages=[{"role": "user", "content": prompt}],
            )

            # Concatenate the text blocks of the reply
            raw_response = "".join(
                block.text for block in message.content if getattr(block, "type", "text") == "text"
            )

            input_tokens = message.usage.input_tokens
            output_tokens = message.usage.output_tokens

        except Exception as e:
            raise LLMError(f"Anthropic API call failed: {e}")

        return self._build_result(raw_response, input_tokens, output_tokens)
