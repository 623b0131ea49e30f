"""Tests for commitai.settings module."""

import logging

import pytest
import yaml

from commitai.config import LLMProvider
from commitai.global_config import save_credential
from commitai.settings import (
    ConfigError,
    Settings,
    env_overrides,
    find_git_root,
    find_project_configs,
    load_project_config,
    load_settings,
    normalize_keys,
    validate_project_config_path,
)


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data))
    return path


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self):
        """Test built-in defaults."""
        settings = Settings()
        assert settings.provider == "ollama"
        assert settings.api_url == "http://localhost:11434"
        assert settings.model == "llama2"
        assert settings.language == "english"
        assert settings.prompt_template == "default.txt"
        assert settings.timeout_seconds == 300
        assert settings.max_tokens == 150
        assert settings.ignore_file == ".caiignore"

    def test_provider_normalized(self):
        """Test provider names are case-insensitive."""
        assert Settings(provider=" OpenAI ").llm_provider == LLMProvider.OPENAI

    def test_trailing_slash_stripped(self):
        """Test the API URL loses its trailing slash."""
        assert Settings(api_url="http://host:1234/").api_url == "http://host:1234"

    def test_unknown_provider(self):
        """Test an unknown provider fails on access."""
        with pytest.raises(ConfigError) as exc_info:
            Settings(provider="mystery").llm_provider
        assert "mystery" in str(exc_info.value)

    def test_non_positive_timeout_rejected(self):
        """Test timeout must be positive."""
        with pytest.raises(ValueError):
            Settings(timeout_seconds=0)


class TestResolveApiKey:
    """Tests for Settings.resolve_api_key."""

    def test_ollama_needs_no_key(self):
        """Test keyless providers resolve to None."""
        assert Settings().resolve_api_key() is None

    def test_api_token_wins(self, monkeypatch):
        """Test api_token beats the environment."""
        monkeypatch.setenv("OPENAI_API_KEY", "env-key")
        settings = Settings(provider="openai", api_token="token")
        assert settings.resolve_api_key() == "token"

    def test_environment_then_credentials(self, monkeypatch):
        """Test the provider variable beats the credentials file."""
        save_credential("OPENAI_API_KEY", "file-key")
        settings = Settings(provider="openai")
        assert settings.resolve_api_key() == "file-key"

        monkeypatch.setenv("OPENAI_API_KEY", "env-key")
        assert settings.resolve_api_key() == "env-key"


class TestValidateForGeneration:
    """Tests for Settings.validate_for_generation."""

    def test_defaults_are_valid(self):
        """Test the default ollama setup needs nothing else."""
        Settings().validate_for_generation()

    def test_empty_required_field(self):
        """Test an empty model is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            Settings(model="  ").validate_for_generation()
        assert "model" in str(exc_info.value)

    def test_missing_api_key(self):
        """Test hosted providers need a key."""
        with pytest.raises(ConfigError) as exc_info:
            Settings(provider="anthropic").validate_for_generation()
        assert "ANTHROPIC_API_KEY" in str(exc_info.value)

    def test_unknown_provider(self):
        """Test unknown providers are rejected."""
        with pytest.raises(ConfigError):
            Settings(provider="nope").validate_for_generation()


class TestNormalizeKeys:
    """Tests for normalize_keys function."""

    def test_field_and_env_names(self):
        """Test both key spellings map to fields."""
        values = normalize_keys({"model": "m", "CAI_LANGUAGE": "german"}, "test")
        assert values == {"model": "m", "language": "german"}

    def test_unknown_keys_warned(self, caplog):
        """Test unknown keys are dropped with a warning."""
        with caplog.at_level(logging.WARNING, logger="commitai.settings"):
            values = normalize_keys({"colour": "blue"}, "cfg.yaml")
        assert values == {}
        assert "colour" in caplog.text

    def test_empty_values_dropped(self):
        """Test empty values never override lower layers."""
        assert normalize_keys({"model": "", "language": None}, "test") == {}


class TestEnvOverrides:
    """Tests for env_overrides function."""

    def test_reads_cai_variables(self):
        """Test string and numeric variables are parsed."""
        values = env_overrides(
            {
                "CAI_MODEL": "gpt-4o",
                "CAI_TIMEOUT_SECONDS": "30",
                "CAI_TEMPERATURE": "0.2",
                "UNRELATED": "x",
            }
        )
        assert values == {"model": "gpt-4o", "timeout_seconds": 30, "temperature": 0.2}

    def test_invalid_numbers_ignored(self, caplog):
        """Test bad numbers are skipped with a warning."""
        with caplog.at_level(logging.WARNING, logger="commitai.settings"):
            values = env_overrides(
                {"CAI_TIMEOUT_SECONDS": "soon", "CAI_MAX_TOKENS": "-5", "CAI_TEMPERATURE": "hot"}
            )
        assert values == {}
        assert "CAI_TIMEOUT_SECONDS" in caplog.text

    def test_empty_variables_ignored(self):
        """Test blank variables do not count."""
        assert env_overrides({"CAI_MODEL": "  "}) == {}


class TestProjectConfig:
    """Tests for project .commitai discovery and loading."""

    def test_find_git_root(self, temp_dir):
        """Test the nearest directory with .git is found."""
        (temp_dir / "repo" / ".git").mkdir(parents=True)
        nested = temp_dir / "repo" / "a" / "b"
        nested.mkdir(parents=True)
        assert find_git_root(nested) == temp_dir / "repo"

    def test_configs_root_first(self, temp_dir):
        """Test configs are ordered from the git root down."""
        root = temp_dir / "repo"
        (root / ".git").mkdir(parents=True)
        sub = root / "sub"
        root_config = write_yaml(root / ".commitai", {"model": "root"})
        sub_config = write_yaml(sub / ".commitai", {"model": "sub"})

        assert find_project_configs(sub) == [root_config, sub_config]

    def test_outside_repository_only_project_dir(self, temp_dir):
        """Test without a git root only the project dir is checked."""
        project = temp_dir / "plain"
        write_yaml(temp_dir / ".commitai", {"model": "above"})
        config = write_yaml(project / ".commitai", {"model": "here"})

        assert find_project_configs(project) == [config]

    def test_validate_path(self, temp_dir):
        """Test traversal and wrong names are rejected."""
        with pytest.raises(ConfigError):
            validate_project_config_path(temp_dir / ".." / ".commitai")
        with pytest.raises(ConfigError):
            validate_project_config_path(temp_dir / "config.yaml")
        assert validate_project_config_path(temp_dir / ".commitai") == temp_dir / ".commitai"

    def test_load_rejects_non_mapping(self, temp_dir):
        """Test a YAML list is an error."""
        path = temp_dir / ".commitai"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_project_config(path)


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_creates_default_config(self, isolated_config_dir):
        """Test the first run writes config.yaml."""
        settings = load_settings(environ={})

        config_file = isolated_config_dir / "config.yaml"
        assert config_file.exists()
        assert settings.config_dir == isolated_config_dir.resolve()
        assert settings.provider == "ollama"

    def test_precedence(self, temp_dir):
        """Test env > project > global > defaults."""
        config_file = write_yaml(
            temp_dir / "cfg" / "config.yaml",
            {"model": "global-model", "language": "german", "CAI_MAX_TOKENS": 99},
        )
        project = temp_dir / "project"
        write_yaml(project / ".commitai", {"model": "project-model", "temperature": 0.1})

        settings = load_settings(
            config_file=config_file,
            project_path=project,
            environ={"CAI_MODEL": "env-model"},
        )

        assert settings.model == "env-model"
        assert settings.temperature == 0.1
        assert settings.language == "german"
        assert settings.max_tokens == 99
        assert settings.api_url == "http://localhost:11434"
        assert settings.config_dir == (temp_dir / "cfg").resolve()

    def test_invalid_value(self, temp_dir):
        """Test out-of-range config values become ConfigError."""
        config_file = write_yaml(temp_dir / "config.yaml", {"temperature": 9})
        with pytest.raises(ConfigError):
            load_settings(config_file=config_file, environ={})
