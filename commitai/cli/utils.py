"""Shared utility functions for CLI commands."""

import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional

import typer

from commitai import __version__

# Tried in order when neither $EDITOR nor $VISUAL is set
FALLBACK_EDITORS = ["nano", "vim", "vi", "emacs"]


def find_editor() -> Optional[list[str]]:
    """Find an available text editor.

    Preference order:
    1. $EDITOR environment variable
    2. $VISUAL environment variable
    3. The first of nano, vim, vi, emacs found on PATH

    Returns:
        List of command parts to run the editor, or None if none is found.
    """
    for env_var in ("EDITOR", "VISUAL"):
        editor = os.environ.get(env_var, "").strip()
        if editor:
            return shlex.split(editor)

    for candidate in FALLBACK_EDITORS:
        if shutil.which(candidate):
            return [candidate]

    return None


def open_editor(file_path: Path) -> None:
    """Open the file in an editor and wait for it to close.

    Args:
        file_path: Path to the file to edit.

    Raises:
        typer.Exit: If no editor is available or it cannot be started.
    """
    editor_cmd = find_editor()
    if not editor_cmd:
        typer.echo("Error: No editor found. Please set EDITOR or VISUAL environment variable.", err=True)
        raise typer.Exit(1)

    try:
        # Run the editor and wait for it to complete
        result = subprocess.run(
            editor_cmd + [str(file_path)],
            check=False,
        )

        if result.returncode != 0:
            typer.echo(f"Warning: Editor exited with code {result.returncode}", err=True)

    except FileNotFoundError:
        typer.echo(f"Error: Editor not found: {editor_cmd[0]}", err=True)
        raise typer.Exit(1)


def mask_key(api_key: str) -> str:
    """Show only the ends of an API key."""
    return api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"


def version_text() -> str:
    return f"commit-ai version {__version__}"


def version_callback(value: bool) -> None:
    """Print the version for ``--version`` and stop."""
    if value:
        typer.echo(version_text())
        raise typer.Exit()
