"""Data models for repository changes.

Contains:
- ChangeKind: Added / Modified / Deleted
- ChangeRecord: One touched path with its before and after content
- StatusEntry: One parsed entry of ``git status --porcelain=v1 -z``
- ChangeSetKind: Which comparison produced a diff
- ChangeSet: The selected change-set and its synthesized diff text
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ChangeKind(Enum):
    """Kind of change recorded for a single path."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"


@dataclass(frozen=True)
class ChangeRecord:
    """A single touched path.

    Attributes:
        path: Repository-relative POSIX path.
        kind: The kind of change.
        before: Content as of the last snapshot (None for added files).
        after: Content after the change (None for deleted files).
    """

    path: str
    kind: ChangeKind
    before: Optional[str] = None
    after: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind == ChangeKind.ADDED:
            valid = self.before is None and self.after is not None
        elif self.kind == ChangeKind.DELETED:
            valid = self.before is not None and self.after is None
        else:
            valid = self.before is not None and self.after is not None
        if not valid:
            raise ValueError(
                f"Inconsistent content for {self.kind.value} record {self.path!r}: "
                f"before={'set' if self.before is not None else 'absent'}, "
                f"after={'set' if self.after is not None else 'absent'}"
            )

    @classmethod
    def from_contents(
        cls, path: str, before: Optional[str], after: Optional[str]
    ) -> Optional["ChangeRecord"]:
        """Build a record, inferring the kind from which side is present.

        Returns:
            The record, or None when both sides are absent.
        """
        if before is None and after is None:
            return None
        if before is None:
            return cls(path=path, kind=ChangeKind.ADDED, after=after)
        if after is None:
            return cls(path=path, kind=ChangeKind.DELETED, before=before)
        return cls(path=path, kind=ChangeKind.MODIFIED, before=before, after=after)


@dataclass(frozen=True)
class StatusEntry:
    """One entry from porcelain v1 status output.

    The porcelain format uses two columns:
    - First column: staged status (index)
    - Second column: worktree status
    """

    path: str
    index_status: str
    worktree_status: str
    orig_path: Optional[str] = None

    @property
    def is_untracked(self) -> bool:
        return self.index_status == "?" and self.worktree_status == "?"

    @property
    def is_ignored(self) -> bool:
        return self.index_status == "!" and self.worktree_status == "!"

    @property
    def is_staged(self) -> bool:
        return self.index_status not in (" ", "?", "!")

    @property
    def is_unstaged(self) -> bool:
        if self.is_ignored:
            return False
        return self.is_untracked or self.worktree_status != " "


class ChangeSetKind(Enum):
    """Which comparison produced a change-set."""

    STAGED = "staged"
    UNSTAGED = "unstaged"
    INITIAL = "initial"
    EMPTY = "empty"


@dataclass
class ChangeSet:
    """The change-set chosen by the selector.

    Attributes:
        kind: Which comparison was performed.
        diff: The synthesized diff text (empty for EMPTY).
        paths: Paths that produced a section, in output order.
        records: The change records behind those sections.
        skipped: Paths skipped because their content could not be read.
    """

    kind: ChangeSetKind
    diff: str = ""
    paths: list[str] = field(default_factory=list)
    records: list[ChangeRecord] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.diff
