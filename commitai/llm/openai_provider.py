"""OpenAI GPT provider implementation."""

from openai import OpenAI

from commitai.config import DEFAULT_API_URL, LLMProvider
from commitai.llm.base import BaseLLMProvider, LLMResult
from commitai.llm.exceptions import LLMError, MissingAPIKeyError


class OpenAIProvider(BaseLLMProvider):
    """OpenAI GPT LLM provider."""

    provider = LLMProvider.OPENAI
    display_name = "OpenAI"
    default_model = "gpt-4o"

    @property
    def base_url(self) -> str | None:
        """Custom endpoint, or None for the official API.

        The local Ollama default URL means no endpoint was configured.
        """
        api_url = self.settings.api_url.rstrip("/")
        if not api_url or api_url == DEFAULT_API_URL:
            return None
        return f"{api_url}/v1"

    def generate(self, prompt: str) -> LLMResult:
        """Generate a commit message using OpenAI GPT.

        Args:
            prompt: The rendered prompt text.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For other LLM-related errors.
        """
        api_key = self.get_api_key()

        # Create the OpenAI client
        client = OpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=self.settings.timeout_seconds,
        )

        try:
            # Call the OpenAI API
            response = client.chat.completions.create(
                model=self.model,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                messages=[{"role": "user", "content": prompt}],
            )

            # Extract the text response
            raw_response = response.choices[0].message.content

            # Extract token usage
            input_tokens = response.usage.prompt_tokens if response.usage else 0
            output_tokens = response.usage.completion_tokens if response.usage else 0

        except MissingAPIKeyError:
            raise
        except Exception as e:
            raise LLMError(f"OpenAI API call failed: {e}")

        return self._build_result(raw_response, input_tokens, output_tokens)
