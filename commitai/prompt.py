"""Prompt template loading and rendering.

The template is a plain text file in the config directory (default.txt
unless ``prompt_template`` says otherwise). ``{diff}`` and ``{language}``
are substituted with str.format. A missing template is created with the
default content on first use.
"""

import logging
import os
from pathlib import Path

from commitai.global_config import get_global_config_dir
from commitai.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = """You are an expert developer reviewing a git diff to generate a concise, meaningful commit message.

Language: Generate the commit message in {language}.

Git Diff:
{diff}

Based on the above git diff, generate a single line commit message that:
1. Is concise and descriptive (50 characters or less preferred)
2. Uses conventional commit format if applicable (feat:, fix:, docs:, etc.)
3. Describes WHAT changed, not HOW it was implemented
4. Uses imperative mood (e.g., "Add feature" not "Added feature")

Commit Message:"""

# Placeholders from templates written for older releases
_LEGACY_PLACEHOLDERS = {
    "{{.Diff}}": "{diff}",
    "{{.Language}}": "{language}",
}


class PromptTemplateError(Exception):
    """Raised when the prompt template cannot be located, read, or rendered."""

    pass


def get_template_path(settings: Settings) -> Path:
    """Resolve the template file for the given settings.

    An absolute ``prompt_template`` is used as-is; otherwise it is taken
    relative to the config directory.

    Raises:
        PromptTemplateError: If the resolved path is relative or contains ``..``.
    """
    template = Path(settings.prompt_template).expanduser()
    if not template.is_absolute():
        config_dir = settings.config_dir or get_global_config_dir()
        template = Path(config_dir) / template
    return validate_template_path(template)


def validate_template_path(path: Path) -> Path:
    """Ensure a template path is absolute and free of ``..`` segments."""
    path = Path(path)
    if ".." in path.parts:
        raise PromptTemplateError(f"Path traversal detected in template path: {path}")
    if not path.is_absolute():
        raise PromptTemplateError(f"Template path must be absolute: {path}")
    return path


def create_default_template(path: Path) -> None:
    """Write the default template to ``path`` (dir 0750, file 0600)."""
    path = validate_template_path(path)
    try:
        path.parent.mkdir(mode=0o750, parents=True, exist_ok=True)
        path.write_text(DEFAULT_TEMPLATE)
        os.chmod(path, 0o600)
    except OSError as e:
        raise PromptTemplateError(f"Failed to write default template {path}: {e}")
    logger.debug("Created default prompt template at %s", path)


def load_template(settings: Settings) -> str:
    """Read the template text, creating the default file if it is missing.

    Raises:
        PromptTemplateError: If the file cannot be read or written.
    """
    path = get_template_path(settings)
    if not path.exists():
        create_default_template(path)
        return DEFAULT_TEMPLATE
    try:
        return path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise PromptTemplateError(f"Failed to read template {path}: {e}")


def format_template(template: str, diff: str, language: str) -> str:
    """Substitute ``{diff}`` and ``{language}`` into a template string.

    Literal braces must be doubled (``{{`` and ``}}``).

    Raises:
        PromptTemplateError: On unknown placeholders or unbalanced braces.
    """
    for legacy, placeholder in _LEGACY_PLACEHOLDERS.items():
        template = template.replace(legacy, placeholder)
    try:
        return template.format(diff=diff, language=language)
    except KeyError as e:
        raise PromptTemplateError(f"Unknown placeholder in template: {{{e.args[0]}}}")
    except (IndexError, ValueError) as e:
        raise PromptTemplateError(f"Malformed template: {e}")


def render_prompt(settings: Settings, diff: str) -> str:
    """Load the configured template and render it for ``diff``.

    Args:
        settings: Resolved settings (template location and language).
        diff: The filtered diff text.

    Returns:
        The prompt to send to the backend.
    """
    return format_template(load_template(settings), diff=diff, language=settings.language)
