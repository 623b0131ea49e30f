"""Git command runner.

Contains:
- _run_git_command: Run a git command and return its output
- _run_git_bytes: Run a git command and return raw stdout bytes
- find_repo_root: Get the root directory of the repository containing a path
"""

import subprocess
from pathlib import Path
from typing import Optional

from commitai.git.exceptions import GitError, NotARepositoryError


def _run_git_command(
    args: list[str],
    cwd: Optional[Path] = None,
    input_text: Optional[str] = None,
    strip: bool = True,
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run the command in (defaults to the process cwd).
        input_text: Optional text passed on stdin.
        strip: Whether to strip surrounding whitespace from stdout.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            cwd=cwd,
            input=input_text,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip() if strip else result.stdout
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def _run_git_bytes(args: list[str], cwd: Optional[Path] = None) -> bytes:
    """Run a git command and return its raw stdout.

    Used for blob contents and NUL-separated listings, where decoding
    is the caller's concern.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            cwd=cwd,
            capture_output=True,
            check=True,
        )
        return result.stdout
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode("utf-8", errors="replace") if e.stderr else ""
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr.strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def find_repo_root(path: Optional[Path] = None) -> Path:
    """Get the root directory of the git repository containing ``path``.

    Args:
        path: Any directory (or file) inside the repository. Defaults to cwd.

    Returns:
        Absolute path to the repository root.

    Raises:
        NotARepositoryError: If ``path`` is not inside a git repository.
    """
    start = Path(path or ".").resolve()
    if start.is_file():
        start = start.parent
    if not start.exists():
        raise NotARepositoryError(f"Path does not exist: {start}")
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=start)
    except GitError as e:
        raise NotARepositoryError(
            f"Not in a git repository: {start}. Please run this command from within a git repo."
        ) from e
    return Path(root).resolve()
