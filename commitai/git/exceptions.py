"""Git-related exception classes.

Contains all exception classes for repository operations:
- GitError: Base exception for git-related errors
- RepositoryError: Repository or its metadata cannot be read (fatal)
- NotARepositoryError: The target path is not inside a git repository
- NoStagedChangesError: Raised when committing without staged changes
- FileReadError: A single file's content cannot be read (recoverable)
- UnsafePathError: A path escapes the repository root (recoverable)
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class RepositoryError(GitError):
    """Raised when the repository or its metadata cannot be read."""

    pass


class NotARepositoryError(RepositoryError):
    """Raised when the target path is not inside a git repository."""

    pass


class NoStagedChangesError(GitError):
    """Raised when there are no staged changes."""

    pass


class FileReadError(GitError):
    """Raised when the content of one file cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class UnsafePathError(GitError):
    """Raised when a path contains traversal segments or leaves the repository."""

    pass
