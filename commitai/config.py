"""Static configuration for commit-ai.

User settings are loaded by commitai.settings from ~/.commitai/config.yaml,
project-local .commitai files and CAI_* environment variables.
This module only holds the fixed tables those layers are validated against.
"""

from enum import Enum


class LLMProvider(Enum):
    """Supported text-generation backends."""

    OLLAMA = "ollama"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    GROQ = "groq"
    OPENROUTER = "openrouter"


# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_API_URL = "http://localhost:11434"
DEFAULT_PROVIDER = LLMProvider.OLLAMA
DEFAULT_MODEL = "llama2"
DEFAULT_LANGUAGE = "english"
DEFAULT_PROMPT_TEMPLATE = "default.txt"
DEFAULT_TIMEOUT_SECONDS = 300
DEFAULT_MAX_TOKENS = 150
DEFAULT_TEMPERATURE = 0.7

# Name of the project-local override file
PROJECT_CONFIG_FILE_NAME = ".commitai"


# ============================================================
# ENVIRONMENT VARIABLES
# ============================================================

# Settings field -> environment variable / legacy upper-case key
ENV_VARS = {
    "api_url": "CAI_API_URL",
    "model": "CAI_MODEL",
    "provider": "CAI_PROVIDER",
    "api_token": "CAI_API_TOKEN",
    "language": "CAI_LANGUAGE",
    "prompt_template": "CAI_PROMPT_TEMPLATE",
    "timeout_seconds": "CAI_TIMEOUT_SECONDS",
    "max_tokens": "CAI_MAX_TOKENS",
    "temperature": "CAI_TEMPERATURE",
    "ignore_file": "CAI_IGNORE_FILE",
}


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.OLLAMA: [
        "llama2",
        "llama3.1",
        "llama3.2",
        "mistral",
        "codellama",
        "qwen2.5-coder",
    ],
    LLMProvider.OPENAI: [
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4.1-nano",
        "gpt-4o",
        "gpt-4o-mini",
        "gpt-3.5-turbo",
    ],
    LLMProvider.ANTHROPIC: [
        "claude-sonnet-4-20250514",
        "claude-3-5-sonnet-latest",
        "claude-3-5-haiku-latest",
    ],
    LLMProvider.GOOGLE: [
        "gemini-2.5-pro",
        "gemini-2.5-flash",
        "gemini-2.0-flash",
        "gemini-2.0-flash-lite",
    ],
    LLMProvider.GROQ: [
        "llama-3.3-70b-versatile",
        "llama-3.1-8b-instant",
        "mixtral-8x7b-32768",
    ],
    LLMProvider.OPENROUTER: [
        "anthropic/claude-sonnet-4",
        "openai/gpt-4o",
        "google/gemini-2.0-flash-exp",
        "meta-llama/llama-3.3-70b-instruct",
        "deepseek/deepseek-chat",
        "qwen/qwen-2.5-coder-32b-instruct",
    ],
}


# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

# Ollama runs locally and needs no key
API_KEY_ENV_VARS = {
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    LLMProvider.GOOGLE: "GOOGLE_API_KEY",
    LLMProvider.GROQ: "GROQ_API_KEY",
    LLMProvider.OPENROUTER: "OPENROUTER_API_KEY",
}


def get_api_key_env_var(provider: LLMProvider) -> str | None:
    """Get the environment variable name for a provider's API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name, or None for keyless providers.
    """
    return API_KEY_ENV_VARS.get(provider)


def provider_names() -> str:
    """Comma-separated list of provider names for help and error text."""
    return ", ".join(p.value for p in LLMProvider)
