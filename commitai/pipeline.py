"""The diff pipeline: select a change-set, synthesize it, filter it."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from commitai.git.changeset import select_change_set
from commitai.git.models import ChangeSetKind
from commitai.ignore.filter import count_changes, filter_diff
from commitai.ignore.patterns import load_pattern_set
from commitai.settings import Settings

logger = logging.getLogger(__name__)


class DiffOutcome(Enum):
    """What the caller should do with a DiffResult."""

    NO_CHANGES = "no_changes"
    ALL_IGNORED = "all_ignored"
    VISIBLE = "visible"


@dataclass
class DiffResult:
    """Raw and filtered diff text for one change-set."""

    change_set: ChangeSetKind
    raw_diff: str
    filtered_diff: str
    skipped: list[str] = field(default_factory=list)

    @property
    def outcome(self) -> DiffOutcome:
        if not self.raw_diff:
            return DiffOutcome.NO_CHANGES
        if not self.filtered_diff:
            return DiffOutcome.ALL_IGNORED
        return DiffOutcome.VISIBLE


def collect_diff(repo, settings: Settings, target_dir: Optional[Path] = None) -> DiffResult:
    """Build the diff that will be sent to the backend.

    Args:
        repo: Repository handle.
        settings: Resolved settings (only ``ignore_file`` is used).
        target_dir: Directory the ignore-file walk starts from. Defaults to
            the repository root.

    Returns:
        The selected change-set kind with its raw and filtered diff text.

    Raises:
        RepositoryError: If repository state cannot be read.
        IgnorePatternError: If an ignore file is malformed.
    """
    change_set = select_change_set(repo)
    raw_diff = change_set.diff

    start_dir = Path(target_dir) if target_dir is not None else repo.root
    pattern_set = load_pattern_set(start_dir, stop_at=repo.root, file_name=settings.ignore_file)
    filtered_diff = filter_diff(raw_diff, pattern_set)
    added, removed = count_changes(filtered_diff)

    logger.debug(
        "Change-set %s: %d bytes raw, %d bytes after %d ignore file(s), +%d/-%d lines",
        change_set.kind.value,
        len(raw_diff),
        len(filtered_diff),
        len(pattern_set),
        added,
        removed,
    )
    return DiffResult(
        change_set=change_set.kind,
        raw_diff=raw_diff,
        filtered_diff=filtered_diff,
        skipped=list(change_set.skipped),
    )
