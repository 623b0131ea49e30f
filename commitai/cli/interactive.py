"""Interactive review of a generated commit message."""

import tempfile
from enum import Enum
from pathlib import Path

import typer

from commitai.cli.utils import open_editor

DIVIDER = "─" * 61

EDIT_OPTIONS = [
    "Keep as is",
    "Edit inline",
    "Edit with external editor",
]


class EditMode(Enum):
    """How the user chose to edit the message."""

    NONE = 0
    INLINE = 1
    EDITOR = 2


class InteractiveEditor:
    """Terminal prompts for reviewing, editing and confirming a message."""

    def display_message(self, title: str, message: str) -> None:
        """Print a message between two divider lines."""
        typer.echo(f"\n{title}:")
        typer.echo(DIVIDER)
        typer.echo(message)
        typer.echo(DIVIDER)

    def prompt_yes_no(self, question: str, default: bool = True) -> bool:
        return typer.confirm(question, default=default)

    def prompt_choice(self, question: str, options: list[str]) -> int:
        """Ask the user to pick one of ``options``.

        Returns:
            Zero-based index of the chosen option (the first one by default).
        """
        typer.echo(question)
        for i, option in enumerate(options, 1):
            typer.echo(f"  {i}. {option}")
        while True:
            choice = typer.prompt(f"Choose an option (1-{len(options)})", type=int, default=1)
            if 1 <= choice <= len(options):
                return choice - 1
            typer.echo(f"Invalid choice: {choice}", err=True)

    def edit_message(self, message: str, mode: EditMode) -> str:
        if mode == EditMode.INLINE:
            return self.edit_inline(message)
        if mode == EditMode.EDITOR:
            return self.edit_with_editor(message)
        return message

    def edit_inline(self, message: str) -> str:
        """Replace the message with one typed at the prompt.

        An empty answer keeps the current message.
        """
        typer.echo(f"Current message: {message}")
        response = typer.prompt(
            "Enter new message (or press Enter to keep current)",
            default="",
            show_default=False,
        )
        return response.strip() or message

    def edit_with_editor(self, message: str) -> str:
        """Edit the message in the user's editor via a temporary file.

        Returns:
            The edited text, stripped. The original message if the result
            is empty.
        """
        with tempfile.TemporaryDirectory(prefix="commit-ai-") as tmpdir:
            message_file = Path(tmpdir) / "COMMIT_EDITMSG"
            message_file.write_text(message)
            open_editor(message_file)
            edited = message_file.read_text().strip()
        return edited or message


def run_interactive(message: str, repo, edit: bool, commit: bool, editor: InteractiveEditor | None = None) -> str:
    """Review flow for ``--edit`` and ``--commit``.

    Args:
        message: The generated commit message.
        repo: Repository handle used for committing.
        edit: Offer to edit the message.
        commit: Ask for confirmation and commit.
        editor: Prompt implementation. A fresh InteractiveEditor by default.

    Returns:
        The final message.

    Raises:
        GitError: If the commit fails.
    """
    editor = editor or InteractiveEditor()
    final_message = message

    editor.display_message("Generated Commit Message", message)

    if edit:
        choice = editor.prompt_choice("How would you like to proceed?", EDIT_OPTIONS)
        final_message = editor.edit_message(message, EditMode(choice))

    if commit:
        if final_message != message:
            editor.display_message("Final Commit Message", final_message)

        if editor.prompt_yes_no("Do you want to commit with this message?", default=True):
            repo.commit(final_message)
            typer.echo("✓ Committed successfully!")
        else:
            typer.echo("Commit cancelled.")
    else:
        typer.echo(f"\nFinal message:\n{final_message}")

    return final_message
