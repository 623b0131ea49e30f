"""CLI commands for .caiignore management."""

from pathlib import Path

import typer

from commitai.git import GitError, find_repo_root
from commitai.ignore import (
    IGNORE_FILE_NAME,
    IgnorePatternError,
    add_ignore_pattern,
    load_pattern_set,
    remove_ignore_pattern,
)

# Subcommand group for ignore pattern management
ignore_app = typer.Typer(
    name="ignore",
    help=f"Manage ignore patterns in {IGNORE_FILE_NAME} files",
    add_completion=False,
)

PATH_OPTION_HELP = "Directory whose ignore file to use (default: current directory)"


def _resolve_dirs(path: Path) -> tuple[Path, Path]:
    """Return (target directory, repository root).

    Outside a repository the target directory doubles as the root.
    """
    target = Path(path).resolve()
    if target.is_file():
        target = target.parent
    try:
        root = find_repo_root(target)
    except GitError:
        root = target
    return target, root


@ignore_app.command("list")
def ignore_list(
    path: Path = typer.Option(Path("."), "--path", "-p", help=PATH_OPTION_HELP),
) -> None:
    """Show every ignore file that applies to a directory, with its patterns."""
    target, root = _resolve_dirs(path)
    try:
        pattern_set = load_pattern_set(target, stop_at=root)
    except IgnorePatternError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not pattern_set:
        typer.echo(f"No {IGNORE_FILE_NAME} files found.")
        return

    total = 0
    for matcher in pattern_set:
        typer.echo(f"{matcher.source}:")
        if matcher.patterns:
            for pattern in matcher.patterns:
                typer.echo(f"  - {pattern}")
        else:
            typer.echo("  (no patterns)")
        total += len(matcher.patterns)
        typer.echo()

    typer.echo(f"Total: {total} pattern(s) in {len(pattern_set)} file(s)")
    typer.echo("Matching files are excluded from the diff sent to the LLM.")


@ignore_app.command("add")
def ignore_add(
    pattern: str = typer.Argument(
        ...,
        help="Pattern to add (e.g., *.log, build/, package-lock.json)",
    ),
    path: Path = typer.Option(Path("."), "--path", "-p", help=PATH_OPTION_HELP),
) -> None:
    """Add a pattern to the ignore file in a directory."""
    target, _ = _resolve_dirs(path)
    try:
        if not add_ignore_pattern(target, pattern):
            typer.echo(f"Pattern already exists: {pattern}")
            raise typer.Exit(0)
    except IgnorePatternError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Added ignore pattern: {pattern}")


@ignore_app.command("remove")
def ignore_remove(
    pattern: str = typer.Argument(
        ...,
        help="Pattern to remove from the ignore file",
    ),
    path: Path = typer.Option(Path("."), "--path", "-p", help=PATH_OPTION_HELP),
) -> None:
    """Remove a pattern from the ignore file in a directory."""
    target, _ = _resolve_dirs(path)
    try:
        removed = remove_ignore_pattern(target, pattern)
    except IgnorePatternError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not removed:
        typer.echo(f"Pattern not found: {pattern}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Removed ignore pattern: {pattern}")


@ignore_app.command("check")
def ignore_check(
    file: Path = typer.Argument(..., help="File to check (relative to the current directory)"),
    path: Path = typer.Option(Path("."), "--path", "-p", help=PATH_OPTION_HELP),
) -> None:
    """Report whether a file would be left out of the diff, and by which ignore file."""
    target, root = _resolve_dirs(path)
    absolute = file if file.is_absolute() else Path.cwd() / file
    try:
        relative = absolute.resolve().relative_to(root).as_posix()
    except ValueError:
        typer.echo(f"Error: {file} is outside {root}", err=True)
        raise typer.Exit(1)

    try:
        pattern_set = load_pattern_set(target, stop_at=root, root=root)
    except IgnorePatternError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    matcher = pattern_set.matching_matcher(relative)
    if matcher is None:
        typer.echo(f"Not ignored: {relative}")
    else:
        typer.echo(f"Ignored: {relative} (by {matcher.source})")

