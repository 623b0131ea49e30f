"""Layered settings for commit-ai.

Values are resolved in this order, later layers winning:
1. Built-in defaults (commitai.config)
2. Global config file (~/.commitai/config.yaml or --config FILE)
3. Project .commitai files, from the git root down to the project path
4. CAI_* environment variables

The resulting Settings value is passed explicitly to the pipeline, the
prompt renderer and the provider factory.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from commitai.config import (
    DEFAULT_API_URL,
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_PROMPT_TEMPLATE,
    DEFAULT_PROVIDER,
    DEFAULT_TEMPERATURE,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_VARS,
    PROJECT_CONFIG_FILE_NAME,
    LLMProvider,
    get_api_key_env_var,
    provider_names,
)
from commitai.global_config import (
    get_config_file_path,
    get_credential,
    initialize_default_config,
    load_global_config,
)
from commitai.ignore.patterns import IGNORE_FILE_NAME

logger = logging.getLogger(__name__)

# Fields that must be non-empty before a message can be generated
REQUIRED_FIELDS = ("api_url", "model", "provider", "language", "prompt_template")

_KEY_ALIASES = {env_name.lower(): field for field, env_name in ENV_VARS.items()}


class ConfigError(Exception):
    """Raised when settings are missing or invalid."""

    pass


class Settings(BaseModel):
    """Resolved configuration for one invocation."""

    api_url: str = DEFAULT_API_URL
    model: str = DEFAULT_MODEL
    provider: str = DEFAULT_PROVIDER.value
    api_token: str = ""
    language: str = DEFAULT_LANGUAGE
    prompt_template: str = DEFAULT_PROMPT_TEMPLATE
    timeout_seconds: int = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    ignore_file: str = IGNORE_FILE_NAME
    config_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding the prompt template (the global config dir by default)",
    )

    @field_validator("provider")
    @classmethod
    def normalize_provider(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @property
    def llm_provider(self) -> LLMProvider:
        """The provider as an enum member.

        Raises:
            ConfigError: If the provider name is unknown.
        """
        try:
            return LLMProvider(self.provider)
        except ValueError:
            raise ConfigError(
                f"Unknown provider '{self.provider}'. Valid providers: {provider_names()}"
            )

    def resolve_api_key(self) -> Optional[str]:
        """Find the API key for the configured provider.

        Checks in order:
        1. The api_token setting
        2. The provider's environment variable (e.g. OPENAI_API_KEY)
        3. ~/.commitai/credentials

        Returns:
            The key, or None if none is configured.
        """
        if self.api_token:
            return self.api_token
        env_var = get_api_key_env_var(self.llm_provider)
        if env_var is None:
            return None
        return os.getenv(env_var) or get_credential(env_var)

    def validate_for_generation(self) -> None:
        """Check that everything needed to call a backend is present.

        Raises:
            ConfigError: If a required value is empty, the provider is
                unknown, or a hosted provider has no API key.
        """
        for field in REQUIRED_FIELDS:
            if not str(getattr(self, field)).strip():
                raise ConfigError(f"Setting '{field}' must not be empty")

        provider = self.llm_provider
        env_var = get_api_key_env_var(provider)
        if env_var is not None and not self.resolve_api_key():
            raise ConfigError(
                f"No API key for provider '{provider.value}'. Set {env_var}, "
                f"set CAI_API_TOKEN, or run: commit-ai config set-key {provider.value}"
            )


def normalize_keys(raw: Mapping[str, Any], source: str) -> Dict[str, Any]:
    """Map config file keys onto Settings field names.

    Accepts the field names (``provider``) and the environment variable
    names (``CAI_PROVIDER``). Unknown keys are logged and dropped; empty
    values are dropped so they never override a lower layer.
    """
    values = {}
    for key, value in raw.items():
        name = str(key).strip()
        field = name if name in ENV_VARS else _KEY_ALIASES.get(name.lower())
        if field is None:
            logger.warning("Ignoring unknown config key %r in %s", name, source)
            continue
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        values[field] = value
    return values


def find_git_root(start: Path) -> Optional[Path]:
    """Walk upward from ``start`` looking for a ``.git`` entry.

    Returns:
        The repository root, or None if ``start`` is not inside one.
    """
    current = Path(start).resolve()
    if current.is_file():
        current = current.parent
    while True:
        if (current / ".git").exists():
            return current
        if current.parent == current:
            return None
        current = current.parent


def validate_project_config_path(path: Path) -> Path:
    """Reject project config paths that are not plain .commitai files.

    Raises:
        ConfigError: If the name is wrong or the path contains ``..``.
    """
    path = Path(path)
    if ".." in path.parts:
        raise ConfigError(f"Invalid project config path (contains '..'): {path}")
    if not path.name.endswith(PROJECT_CONFIG_FILE_NAME):
        raise ConfigError(f"Invalid project config file name: {path}")
    return path


def find_project_configs(project_path: Path, git_root: Optional[Path] = None) -> list[Path]:
    """List .commitai files between the git root and ``project_path``.

    Args:
        project_path: Directory the command runs against.
        git_root: Repository root. Discovered when omitted.

    Returns:
        Existing config files, least specific (git root) first.
    """
    project = Path(project_path).resolve()
    if project.is_file():
        project = project.parent
    root = Path(git_root).resolve() if git_root else find_git_root(project)

    directories = [project]
    if root is not None and root != project and root in project.parents:
        current = project.parent
        while True:
            directories.append(current)
            if current == root:
                break
            current = current.parent

    configs = []
    for directory in reversed(directories):
        candidate = validate_project_config_path(directory / PROJECT_CONFIG_FILE_NAME)
        if candidate.is_file():
            configs.append(candidate)
    return configs


def load_project_config(path: Path) -> Dict[str, Any]:
    """Read one project .commitai file.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    path = validate_project_config_path(path)
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read project config {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"Project config {path} must contain a mapping")
    return normalize_keys(data, str(path))


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect CAI_* overrides from the environment.

    Empty variables are ignored. Numeric variables that do not parse, and
    non-positive timeouts, are ignored with a warning.
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for field, env_name in ENV_VARS.items():
        raw = environ.get(env_name, "").strip()
        if not raw:
            continue
        if field in ("timeout_seconds", "max_tokens"):
            try:
                number = int(raw)
            except ValueError:
                logger.warning("Ignoring %s=%r: not an integer", env_name, raw)
                continue
            if number <= 0:
                logger.warning("Ignoring %s=%r: must be positive", env_name, raw)
                continue
            values[field] = number
        elif field == "temperature":
            try:
                values[field] = float(raw)
            except ValueError:
                logger.warning("Ignoring %s=%r: not a number", env_name, raw)
        else:
            values[field] = raw
    return values


def load_settings(
    config_file: Optional[Path] = None,
    project_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve settings from every layer.

    Args:
        config_file: Global config file. Defaults to ~/.commitai/config.yaml,
            which is created with default values if missing.
        project_path: Directory whose .commitai files apply. None skips the
            project layer.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        The merged Settings.

    Raises:
        ConfigError: If any layer holds an invalid value.
        GlobalConfigError: If the global config file cannot be read or written.
    """
    config_file = Path(config_file).expanduser() if config_file else get_config_file_path()
    if initialize_default_config(config_file):
        logger.debug("Created default config at %s", config_file)

    values: Dict[str, Any] = {}
    values.update(normalize_keys(load_global_config(config_file), str(config_file)))

    if project_path is not None:
        for project_config in find_project_configs(project_path):
            logger.debug("Applying project config %s", project_config)
            values.update(load_project_config(project_config))

    values.update(env_overrides(environ))
    values["config_dir"] = config_file.resolve().parent

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}")
