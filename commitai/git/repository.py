"""Repository handle bound to a working tree root.

All repository metadata and blob contents are read through git plumbing
commands run with ``cwd`` set to the repository root; the diff text itself
is synthesized by ``commitai.git.diff``.
"""

import logging
import os
from pathlib import Path, PurePosixPath
from typing import Optional

from commitai.git.exceptions import (
    FileReadError,
    GitError,
    NoStagedChangesError,
    RepositoryError,
    UnsafePathError,
)
from commitai.git.models import StatusEntry
from commitai.git.runner import _run_git_bytes, _run_git_command, find_repo_root

logger = logging.getLogger(__name__)


def _decode(raw: bytes, path: str) -> str:
    """Decode file content as UTF-8 text.

    Raises:
        FileReadError: For binary or non-UTF-8 content.
    """
    if b"\0" in raw:
        raise FileReadError(path, "binary content")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FileReadError(path, f"not valid UTF-8 ({e.reason})")


def parse_porcelain_status(output: bytes) -> list[StatusEntry]:
    """Parse ``git status --porcelain=v1 -z`` output.

    Each record is ``XY <path>``; renames and copies carry the original path
    in the following NUL-separated field.

    Args:
        output: Raw status output.

    Returns:
        Parsed entries in git's order.
    """
    fields = output.decode("utf-8", errors="surrogateescape").split("\0")
    entries = []
    i = 0
    while i < len(fields):
        record = fields[i]
        i += 1
        if len(record) < 4:
            continue
        index_status, worktree_status, path = record[0], record[1], record[3:]
        orig_path = None
        if index_status in "RC" or worktree_status in "RC":
            if i < len(fields):
                orig_path = fields[i]
                i += 1
        entries.append(
            StatusEntry(
                path=path,
                index_status=index_status,
                worktree_status=worktree_status,
                orig_path=orig_path,
            )
        )
    return entries


class Repository:
    """A git repository opened at its working tree root."""

    def __init__(self, root: Path):
        """Initialize the handle.

        Args:
            root: Absolute path to the working tree root. Use ``open`` to
                discover it from any path inside the repository.
        """
        self.root = Path(root).resolve()
        self._snapshot_files: Optional[set[str]] = None
        self._index_files: Optional[set[str]] = None

    @classmethod
    def open(cls, path: Optional[Path] = None) -> "Repository":
        """Open the repository containing ``path``.

        Raises:
            NotARepositoryError: If ``path`` is not inside a repository.
        """
        return cls(find_repo_root(path))

    def _git(self, args: list[str], **kwargs) -> str:
        return _run_git_command(args, cwd=self.root, **kwargs)

    def _git_bytes(self, args: list[str]) -> bytes:
        return _run_git_bytes(args, cwd=self.root)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def has_snapshot(self) -> bool:
        """Return True if HEAD resolves to a commit."""
        try:
            self._git(["rev-parse", "--verify", "--quiet", "HEAD^{commit}"])
            return True
        except GitError:
            # rev-parse --verify exits non-zero on an unborn branch; make sure
            # the repository itself is still readable before reporting that.
            try:
                self._git(["rev-parse", "--git-dir"])
            except GitError as e:
                raise RepositoryError(f"Cannot read repository metadata: {e}") from e
            return False

    def status(self) -> list[StatusEntry]:
        """Return parsed status entries, untracked files listed individually.

        Raises:
            RepositoryError: If status cannot be read.
        """
        try:
            output = self._git_bytes(
                ["status", "--porcelain=v1", "-z", "--untracked-files=all"]
            )
        except GitError as e:
            raise RepositoryError(f"Failed to get status: {e}") from e
        return parse_porcelain_status(output)

    def has_staged_changes(self) -> bool:
        return any(entry.is_staged for entry in self.status())

    def trackable_files(self) -> list[str]:
        """Return tracked files plus untracked files not excluded by .gitignore.

        Raises:
            RepositoryError: If the listing cannot be read.
        """
        try:
            output = self._git_bytes(
                ["ls-files", "--cached", "--others", "--exclude-standard", "-z"]
            )
        except GitError as e:
            raise RepositoryError(f"Failed to list files: {e}") from e
        names = output.decode("utf-8", errors="surrogateescape").split("\0")
        return sorted({name for name in names if name})

    def snapshot_files(self) -> set[str]:
        """Return the set of paths recorded in HEAD (empty without a snapshot)."""
        if self._snapshot_files is None:
            if not self.has_snapshot():
                self._snapshot_files = set()
            else:
                try:
                    output = self._git_bytes(["ls-tree", "-r", "-z", "--name-only", "HEAD"])
                except GitError as e:
                    raise RepositoryError(f"Failed to read HEAD tree: {e}") from e
                names = output.decode("utf-8", errors="surrogateescape").split("\0")
                self._snapshot_files = {name for name in names if name}
        return self._snapshot_files

    def index_files(self) -> set[str]:
        """Return the set of paths present in the staging area."""
        if self._index_files is None:
            try:
                output = self._git_bytes(["ls-files", "--cached", "-z"])
            except GitError as e:
                raise RepositoryError(f"Failed to read index: {e}") from e
            names = output.decode("utf-8", errors="surrogateescape").split("\0")
            self._index_files = {name for name in names if name}
        return self._index_files

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def validate_path(self, path: str) -> Path:
        """Check that a repository-relative path is safe to read.

        Args:
            path: Repository-relative path.

        Returns:
            The absolute path inside the repository.

        Raises:
            UnsafePathError: On traversal segments, absolute paths, or paths
                resolving outside the repository root.
        """
        if not path:
            raise UnsafePathError("Empty path")
        posix = PurePosixPath(path)
        if posix.is_absolute() or Path(path).is_absolute():
            raise UnsafePathError(f"Absolute path not allowed: {path}")
        if ".." in posix.parts:
            raise UnsafePathError(f"Path traversal detected in filename: {path}")

        full_path = self.root.joinpath(*posix.parts)
        normalized = Path(os.path.normpath(full_path))
        try:
            normalized.relative_to(self.root)
        except ValueError:
            raise UnsafePathError(f"Path outside repository: {path}")
        return full_path

    def read_worktree(self, path: str) -> Optional[str]:
        """Read a file as currently on disk.

        Symlinks are represented by their target string, the way git stores
        them, so a link never exposes content outside the repository.

        Returns:
            The content, or None if the file does not exist.

        Raises:
            UnsafePathError: If the path fails validation.
            FileReadError: If the file exists but cannot be read as text.
        """
        full_path = self.validate_path(path)
        try:
            if full_path.is_symlink():
                return os.readlink(full_path)
            if not full_path.exists():
                return None
            if not full_path.is_file():
                raise FileReadError(path, "not a regular file")
            raw = full_path.read_bytes()
        except OSError as e:
            raise FileReadError(path, e.strerror or str(e))
        return _decode(raw, path)

    def read_index(self, path: str) -> Optional[str]:
        """Read a file as recorded in the staging area.

        Returns:
            The staged content, or None if the path is not in the index.

        Raises:
            UnsafePathError: If the path fails validation.
            FileReadError: If the blob cannot be read as text.
        """
        self.validate_path(path)
        if path not in self.index_files():
            return None
        try:
            raw = self._git_bytes(["cat-file", "-p", f":{path}"])
        except GitError as e:
            raise FileReadError(path, str(e))
        return _decode(raw, path)

    def read_snapshot(self, path: str) -> Optional[str]:
        """Read a file as of the last commit.

        Returns:
            The content, or None if the path is not in HEAD (or there is no HEAD).

        Raises:
            UnsafePathError: If the path fails validation.
            FileReadError: If the blob cannot be read as text.
        """
        self.validate_path(path)
        if path not in self.snapshot_files():
            return None
        try:
            raw = self._git_bytes(["cat-file", "-p", f"HEAD:{path}"])
        except GitError as e:
            raise FileReadError(path, str(e))
        return _decode(raw, path)

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def last_commit_message(self) -> str:
        """Return the full message of the last commit.

        Raises:
            RepositoryError: If there are no commits yet.
        """
        if not self.has_snapshot():
            raise RepositoryError("No commits yet in this repository.")
        return self._git(["log", "-1", "--pretty=%B"])

    def stage_all(self) -> None:
        """Stage all changes in the working tree, including deletions."""
        self._git(["add", "-A"])
        self._index_files = None

    def commit(self, message: str) -> str:
        """Create a commit from the staged changes.

        Args:
            message: The commit message.

        Returns:
            The output of git commit.

        Raises:
            NoStagedChangesError: If nothing is staged.
            GitError: If git commit fails.
        """
        if not self.has_staged_changes():
            raise NoStagedChangesError("No staged changes to commit.")
        output = self._git(["commit", "-F", "-"], input_text=message)
        self._snapshot_files = None
        self._index_files = None
        return output
