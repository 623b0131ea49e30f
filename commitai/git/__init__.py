"""Repository access and diff synthesis for commit-ai.

This package provides:
- exceptions: GitError, RepositoryError, NotARepositoryError,
              NoStagedChangesError, FileReadError, UnsafePathError
- runner: _run_git_command, find_repo_root
- models: ChangeKind, ChangeRecord, StatusEntry, ChangeSetKind, ChangeSet
- repository: Repository, parse_porcelain_status
- diff: synthesize, synthesize_record, join_sections, add_prefix
- changeset: select_change_set, build_change_set
"""

# Exceptions
from commitai.git.exceptions import (
    GitError,
    RepositoryError,
    NotARepositoryError,
    NoStagedChangesError,
    FileReadError,
    UnsafePathError,
)

# Runner utilities
from commitai.git.runner import (
    _run_git_command,
    find_repo_root,
)

# Models
from commitai.git.models import (
    ChangeKind,
    ChangeRecord,
    StatusEntry,
    ChangeSetKind,
    ChangeSet,
)

# Repository handle
from commitai.git.repository import (
    Repository,
    parse_porcelain_status,
)

# Diff synthesis
from commitai.git.diff import (
    DIFF_HEADER_PREFIX,
    synthesize,
    synthesize_record,
    join_sections,
    add_prefix,
)

# Change-set selection
from commitai.git.changeset import (
    select_change_set,
    build_change_set,
)


__all__ = [
    # Exceptions
    "GitError",
    "RepositoryError",
    "NotARepositoryError",
    "NoStagedChangesError",
    "FileReadError",
    "UnsafePathError",
    # Runner
    "_run_git_command",
    "find_repo_root",
    # Models
    "ChangeKind",
    "ChangeRecord",
    "StatusEntry",
    "ChangeSetKind",
    "ChangeSet",
    # Repository
    "Repository",
    "parse_porcelain_status",
    # Diff
    "DIFF_HEADER_PREFIX",
    "synthesize",
    "synthesize_record",
    "join_sections",
    "add_prefix",
    # Change-set
    "select_change_set",
    "build_change_set",
]
