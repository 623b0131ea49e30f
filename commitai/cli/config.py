"""CLI commands for configuration management."""

from pathlib import Path
from typing import Optional

import typer

from commitai import global_config
from commitai.cli.utils import mask_key
from commitai.config import AVAILABLE_MODELS, LLMProvider, get_api_key_env_var, provider_names
from commitai.prompt import PromptTemplateError, get_template_path
from commitai.settings import ConfigError, load_settings

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage commit-ai configuration in ~/.commitai/",
    add_completion=False,
)


def _parse_provider(provider: str) -> LLMProvider:
    try:
        return LLMProvider(provider.strip().lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo(f"Valid providers: {provider_names()}")
        raise typer.Exit(1)


@config_app.command("show")
def config_show(
    config_file: Optional[Path] = typer.Option(None, "--config", help="Config file to read"),
    path: Path = typer.Option(Path("."), "--path", "-p", help="Project directory for .commitai overrides"),
) -> None:
    """Show the effective configuration (all layers merged)."""
    try:
        settings = load_settings(config_file=config_file, project_path=path)
    except (ConfigError, global_config.GlobalConfigError) as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Current commit-ai configuration:")
    typer.echo()
    typer.echo(f"  Provider: {settings.provider}")
    typer.echo(f"  Model: {settings.model}")
    typer.echo(f"  API URL: {settings.api_url}")
    typer.echo(f"  Language: {settings.language}")
    typer.echo(f"  Prompt Template: {settings.prompt_template}")
    typer.echo(f"  Timeout: {settings.timeout_seconds}s")
    typer.echo(f"  Max Tokens: {settings.max_tokens}")
    typer.echo(f"  Temperature: {settings.temperature}")
    typer.echo(f"  Ignore File: {settings.ignore_file}")
    typer.echo()

    # Check for API key
    try:
        env_var = get_api_key_env_var(settings.llm_provider)
    except ConfigError as e:
        typer.echo(f"  Warning: {e}")
        return

    if env_var is None:
        typer.echo("  API Key: not required")
        return
    api_key = settings.resolve_api_key()
    if api_key:
        typer.echo(f"  API Key ({env_var}): {mask_key(api_key)}")
    else:
        typer.echo(f"  API Key ({env_var}): not set")


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(
        ...,
        help="Provider name (openai, anthropic, google, groq, openrouter)",
    )
) -> None:
    """Set or update an API key for a provider."""
    llm_provider = _parse_provider(provider)
    env_var = get_api_key_env_var(llm_provider)
    if env_var is None:
        typer.echo(f"{llm_provider.value} does not use an API key.", err=True)
        raise typer.Exit(1)

    typer.echo(f"Setting API key for {llm_provider.value}")
    api_key = typer.prompt(f"Enter your {llm_provider.value} API key", hide_input=True)

    try:
        global_config.save_credential(env_var, api_key.strip())
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {llm_provider.value}")


@config_app.command("set-provider")
def config_set_provider(
    provider: str = typer.Argument(
        ...,
        help="Provider name (ollama, openai, anthropic, google, groq, openrouter)",
    ),
    model: str = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (optional, will prompt if not provided)",
    ),
    config_file: Optional[Path] = typer.Option(None, "--config", help="Config file to update"),
) -> None:
    """Set the active LLM provider and model."""
    llm_provider = _parse_provider(provider)
    models = AVAILABLE_MODELS[llm_provider]

    if not model:
        typer.echo(f"Available models for {llm_provider.value}:")
        for i, m in enumerate(models, 1):
            typer.echo(f"  {i}. {m}")

        model_choice = typer.prompt(f"Select a model (1-{len(models)})", type=int, default=1)
        if model_choice < 1 or model_choice > len(models):
            typer.echo("Invalid choice. Aborting.", err=True)
            raise typer.Exit(1)

        model = models[model_choice - 1]
    elif model not in models:
        typer.echo(f"Warning: {model} is not in the list of known models for {llm_provider.value}")
        if not typer.confirm("Continue anyway?", default=False):
            raise typer.Exit(0)

    try:
        global_config.set_provider_and_model(llm_provider, model, config_file)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Provider set to: {llm_provider.value}")
    typer.echo(f"✓ Model set to: {model}")


@config_app.command("list-providers")
def config_list_providers() -> None:
    """List all available LLM providers."""
    typer.echo("Available LLM providers:")
    typer.echo()
    for provider in LLMProvider:
        typer.echo(f"  • {provider.value}")
    typer.echo()
    typer.echo("Use 'commit-ai config list-models <provider>' to see available models.")


@config_app.command("list-models")
def config_list_models(
    provider: str = typer.Argument(
        None,
        help="Provider name (optional, shows all if not provided)",
    )
) -> None:
    """List available models for a provider (or all providers)."""
    if provider:
        llm_provider = _parse_provider(provider)
        typer.echo(f"Available models for {llm_provider.value}:")
        typer.echo()
        for model in AVAILABLE_MODELS[llm_provider]:
            typer.echo(f"  • {model}")
        typer.echo()
    else:
        for llm_provider in LLMProvider:
            typer.echo(f"{llm_provider.value}:")
            for model in AVAILABLE_MODELS[llm_provider]:
                typer.echo(f"  • {model}")
            typer.echo()


@config_app.command("path")
def config_path(
    config_file: Optional[Path] = typer.Option(None, "--config", help="Config file to resolve against"),
) -> None:
    """Show where configuration files are read from."""
    try:
        settings = load_settings(config_file=config_file)
        template_path = get_template_path(settings)
    except (ConfigError, global_config.GlobalConfigError, PromptTemplateError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Config file: {config_file or global_config.get_config_file_path()}")
    typer.echo(f"Credentials: {global_config.get_credentials_file_path()}")
    typer.echo(f"Prompt template: {template_path}")
