"""Main CLI command for generating commit messages."""

import logging
from pathlib import Path
from typing import Optional

import typer
from typer.core import TyperGroup

from commitai.cli.interactive import InteractiveEditor, run_interactive
from commitai.cli.utils import version_callback
from commitai.git import GitError, NoStagedChangesError, Repository
from commitai.global_config import GlobalConfigError
from commitai.ignore import IgnorePatternError
from commitai.llm import LLMError, MissingAPIKeyError, generate_commit_message
from commitai.logging_config import configure_logging
from commitai.pipeline import DiffOutcome, collect_diff
from commitai.prompt import PromptTemplateError, render_prompt
from commitai.settings import ConfigError, load_settings

logger = logging.getLogger(__name__)

# Hidden option that receives the positional PATH
TARGET_OPTION = "--target-path"


class PathArgumentGroup(TyperGroup):
    """Command group that accepts an optional PATH before any subcommand.

    Click cannot combine an optional group argument with subcommands, so the
    first positional token that is not a command name is passed on as the
    hidden ``--target-path`` option.
    """

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        value_options = {
            opt
            for param in self.params
            if getattr(param, "param_type_name", None) == "option" and not param.is_flag
            for opt in param.opts
        }

        args = list(args)
        i = 0
        while i < len(args):
            token = args[i]
            if token == "--":
                break
            if token.startswith("-"):
                i += 2 if token in value_options else 1
                continue
            if token not in self.commands:
                args[i:i + 1] = [TARGET_OPTION, token]
            break

        return super().parse_args(ctx, args)


def main_command(
    ctx: typer.Context,
    target_path: Optional[Path] = typer.Option(
        None,
        TARGET_OPTION,
        hidden=True,
    ),
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Path to the git repository or a directory inside it (default: current directory)",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Config file (default: ~/.commitai/config.yaml)",
    ),
    show: bool = typer.Option(
        False,
        "--show",
        "-s",
        help="Show the last commit message",
    ),
    edit: bool = typer.Option(
        False,
        "--edit",
        "-e",
        help="Review and edit the generated commit message",
    ),
    commit: bool = typer.Option(
        False,
        "--commit",
        "-c",
        help="Commit the changes with the generated/edited message",
    ),
    add: bool = typer.Option(
        False,
        "--add",
        "-a",
        help="Stage all changes before generating the commit message",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug details (selected change-set, skipped and ignored files) to stderr",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate an AI-powered commit message from pending git changes.

    PATH is the repository (or a directory inside it) to summarize.
    """
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    configure_logging(verbose)
    target = path or target_path or Path(".")

    try:
        settings = load_settings(config_file=config_file, project_path=target)
        repo = Repository.open(target)

        if show:
            InteractiveEditor().display_message("Last Commit Message", repo.last_commit_message())
            return

        if add:
            repo.stage_all()
            typer.echo("Staged all changes")

        result = collect_diff(repo, settings, target_dir=Path(target).resolve())

        if result.outcome == DiffOutcome.NO_CHANGES:
            typer.echo("No changes to commit")
            return
        if result.outcome == DiffOutcome.ALL_IGNORED:
            typer.echo("chore: No changes after applying ignore patterns")
            return

        settings.validate_for_generation()
        prompt = render_prompt(settings, result.filtered_diff)

        typer.echo("Generating commit message...", err=True)
        llm_result = generate_commit_message(settings, prompt)
        logger.debug(
            "Model %s used %d input / %d output tokens",
            llm_result.model,
            llm_result.input_tokens,
            llm_result.output_tokens,
        )

        if edit or commit:
            run_interactive(llm_result.message, repo, edit=edit, commit=commit)
        else:
            typer.echo(llm_result.message)

    except NoStagedChangesError:
        typer.echo("Error: nothing to commit (no changes staged for commit)", err=True)
        typer.echo("Stage your changes first with 'git add' or run with --add.", err=True)
        raise typer.Exit(1)
    except (ConfigError, GlobalConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except (IgnorePatternError, PromptTemplateError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except MissingAPIKeyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def version_command() -> None:
    """Print the version number of commit-ai."""
    version_callback(True)
