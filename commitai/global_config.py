"""Global configuration management for commit-ai.

Handles user-level configuration stored in ~/.commitai/:
- config.yaml: Provider, model, language and prompt settings
- credentials: API keys for hosted providers
- default.txt: The prompt template (created on first use)
"""

import os
import stat
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from commitai.config import (
    DEFAULT_API_URL,
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_PROMPT_TEMPLATE,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT_SECONDS,
    LLMProvider,
)


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".commitai"


def get_global_config_dir() -> Path:
    """Get the global commit-ai configuration directory.

    Returns:
        Path to ~/.commitai/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.commitai/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(mode=0o750, parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.commitai/config.yaml
    """
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to credentials file.

    Returns:
        Path to ~/.commitai/credentials
    """
    return get_global_config_dir() / "credentials"


def default_config() -> Dict[str, Any]:
    """Return the configuration written on first run."""
    return {
        "provider": DEFAULT_PROVIDER.value,
        "model": DEFAULT_MODEL,
        "api_url": DEFAULT_API_URL,
        "language": DEFAULT_LANGUAGE,
        "prompt_template": DEFAULT_PROMPT_TEMPLATE,
        "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
        "max_tokens": DEFAULT_MAX_TOKENS,
        "temperature": DEFAULT_TEMPERATURE,
    }


def load_global_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Load global configuration from a YAML file.

    Args:
        config_file: Config file to read. Defaults to ~/.commitai/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.
    """
    config_file = Path(config_file) if config_file else get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Config file {config_file} must contain a mapping")
    return config


def save_global_config(config: Dict[str, Any], config_file: Optional[Path] = None) -> None:
    """Save global configuration to a YAML file.

    Args:
        config: Configuration dictionary to save.
        config_file: Destination. Defaults to ~/.commitai/config.yaml.
    """
    if config_file:
        config_file = Path(config_file)
        config_file.parent.mkdir(mode=0o750, parents=True, exist_ok=True)
    else:
        ensure_global_config_dir()
        config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
        os.chmod(config_file, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def initialize_default_config(config_file: Optional[Path] = None) -> bool:
    """Write the default config file if it doesn't exist.

    Returns:
        True if a new file was written.
    """
    config_file = Path(config_file) if config_file else get_config_file_path()
    if config_file.exists():
        return False
    save_global_config(default_config(), config_file)
    return True


def _parse_credentials(text: str) -> Dict[str, str]:
    credentials = {}
    for line in text.splitlines():
        line = line.strip()
        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue
        # Parse KEY=value format
        if "=" in line:
            key, value = line.split("=", 1)
            credentials[key.strip()] = value.strip()
    return credentials


def load_credentials() -> Dict[str, str]:
    """Load API keys from ~/.commitai/credentials.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    try:
        return _parse_credentials(credentials_file.read_text())
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")


def save_credential(provider_key: str, api_key: str) -> None:
    """Save or update an API key in the credentials file.

    Args:
        provider_key: Environment variable name (e.g., "OPENAI_API_KEY")
        api_key: The API key value.
    """
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    existing_creds = load_credentials()
    existing_creds[provider_key] = api_key

    try:
        with open(credentials_file, "w") as f:
            f.write("# commit-ai API credentials\n")
            f.write("# Format: PROVIDER_API_KEY=your_key_here\n\n")
            for key, value in existing_creds.items():
                f.write(f"{key}={value}\n")

        # Owner read/write only
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(provider_key: str) -> Optional[str]:
    """Get an API key from the credentials file.

    Args:
        provider_key: Environment variable name (e.g., "OPENAI_API_KEY")

    Returns:
        The API key if found, None otherwise.
    """
    return load_credentials().get(provider_key)


def set_provider_and_model(
    provider: LLMProvider, model: str, config_file: Optional[Path] = None
) -> None:
    """Set the active provider and model in the global config.

    Args:
        provider: The LLM provider to use.
        model: The model name to use.
        config_file: Config file to update. Defaults to ~/.commitai/config.yaml.
    """
    config = load_global_config(config_file)
    config["provider"] = provider.value
    config["model"] = model
    save_global_config(config, config_file)


def is_configured(config_file: Optional[Path] = None) -> bool:
    """Check if a global config file exists."""
    config_file = Path(config_file) if config_file else get_config_file_path()
    return config_file.exists()
