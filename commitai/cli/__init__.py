"""CLI entry point for commit-ai.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from commitai.cli.config import config_app
from commitai.cli.ignore import ignore_app
from commitai.cli.interactive import InteractiveEditor, run_interactive
from commitai.cli.main import PathArgumentGroup, main_command, version_command
from commitai.cli.utils import find_editor, open_editor

# Main application
app = typer.Typer(
    name="commit-ai",
    help="commit-ai: Generate commit messages from git changes with an LLM",
    add_completion=False,
    cls=PathArgumentGroup,
)

# Add subcommand groups
app.add_typer(ignore_app, name="ignore")
app.add_typer(config_app, name="config")

# Add individual commands
app.command("version")(version_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "ignore_app",
    "main_command",
    "version_command",
    "PathArgumentGroup",
    "InteractiveEditor",
    "run_interactive",
    "find_editor",
    "open_editor",
]
