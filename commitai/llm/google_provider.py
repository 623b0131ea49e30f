"""Google Gemini provider implementation."""

from google import genai
from google.genai import types

from commitai.config import LLMProvider
from commitai.llm.base import BaseLLMProvider, LLMResult
from commitai.llm.exceptions import LLMError

# Models whose internal "thinking" consumes the output token budget
THINKING_MODELS = [
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-2.0-flash-thinking",
]

# Multiplier for max_output_tokens on thinking models
THINKING_TOKEN_MULTIPLIER = 3


class GoogleProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    provider = LLMProvider.GOOGLE
    display_name = "Google"
    default_model = "gemini-2.0-flash"

    def _is_thinking_model(self) -> bool:
        """Check if the current model is a thinking model."""
        return any(thinking_model in self.model.lower() for thinking_model in THINKING_MODELS)

    def generate(self, prompt: str) -> LLMResult:
        """Generate a commit message using Google Gemini.

        Args:
            prompt: The rendered prompt text.

        Returns:
            An LLMResult containing the commit message and metadata.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: For other LLM-related errors, including safety blocks
                and truncated replies.
        """
        api_key = self.get_api_key()

        client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=self.settings.timeout_seconds * 1000),
        )

        max_tokens = self.settings.max_tokens
        if self._is_thinking_model():
            max_tokens = max_tokens * THINKING_TOKEN_MULTIPLIER

        try:
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    max_output_tokens=max_tokens,
                    temperature=self.settings.temperature,
                ),
            )
        except Exception as e:
            raise LLMError(f"Google Gemini API call failed: {e}")

        if not response.candidates:
            raise LLMError("Google Gemini returned no candidates in response")

        # Check finish reason - anything other than STOP may mean a bad reply
        finish_reason = str(getattr(response.candidates[0], "finish_reason", ""))
        if "SAFETY" in finish_reason:
            raise LLMError(f"Google Gemini blocked response due to safety filters: {finish_reason}")
        if "MAX_TOKENS" in finish_reason:
            raise LLMError(
                "Google Gemini response was truncated due to max tokens limit. "
                "Increase max_tokens or reduce the diff size."
            )

        raw_response = response.text

        input_tokens = 0
        output_tokens = 0
        usage = getattr(response, "usage_metadata", None)
        if usage:
            input_tokens = getattr(usage, "prompt_token_count", 0) or 0
            output_tokens = getattr(usage, "candidates_token_count", 0) or 0
            # Thinking tokens count against the output budget
            output_tokens += getattr(usage, "thoughts_token_count", 0) or 0

        return self._build_result(raw_response, input_tokens, output_tokens)
