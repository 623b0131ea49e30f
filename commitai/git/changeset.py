"""Change-set selection.

Decides which comparison best represents what the user wants summarized:

1. Staged changes: last snapshot vs. staging area.
2. Unstaged changes (a snapshot exists): last snapshot vs. working copy.
3. No snapshot yet: every tracked-or-trackable file as newly added.
4. Otherwise an empty change-set.

Repository metadata failures propagate as RepositoryError. A file whose
content cannot be read is skipped and logged at debug level.
"""

import logging
from typing import Callable, Iterable, Optional

from commitai.git.diff import join_sections, synthesize_record
from commitai.git.exceptions import FileReadError, UnsafePathError
from commitai.git.models import ChangeRecord, ChangeSet, ChangeSetKind, StatusEntry

logger = logging.getLogger(__name__)

ContentReader = Callable[[str], Optional[str]]


def _no_content(_path: str) -> Optional[str]:
    return None


def _entry_paths(entries: Iterable[StatusEntry]) -> list[str]:
    """Collect paths from status entries, including rename sources."""
    paths = set()
    for entry in entries:
        paths.add(entry.path)
        if entry.orig_path:
            paths.add(entry.orig_path)
    return sorted(paths)


def build_change_set(
    kind: ChangeSetKind,
    paths: Iterable[str],
    read_before: ContentReader,
    read_after: ContentReader,
) -> ChangeSet:
    """Synthesize the diff for ``paths`` using the given content readers.

    Args:
        kind: The change-set kind to report.
        paths: Repository-relative paths to compare.
        read_before: Returns the "before" content of a path, or None if absent.
        read_after: Returns the "after" content of a path, or None if absent.

    Returns:
        A ChangeSet whose sections follow path order.
    """
    change_set = ChangeSet(kind=kind)
    sections = []

    for path in sorted(set(paths)):
        try:
            before = read_before(path)
            after = read_after(path)
        except (FileReadError, UnsafePathError) as e:
            logger.debug("Skipping %s: %s", path, e)
            change_set.skipped.append(path)
            continue

        record = ChangeRecord.from_contents(path, before, after)
        if record is None:
            continue
        section = synthesize_record(record)
        if section is None:
            continue
        sections.append(section)
        change_set.paths.append(path)
        change_set.records.append(record)

    change_set.diff = join_sections(sections)
    logger.debug(
        "Built %s change-set: %d section(s), %d skipped",
        kind.value,
        len(change_set.paths),
        len(change_set.skipped),
    )
    return change_set


def get_staged_change_set(repo, entries: list[StatusEntry]) -> ChangeSet:
    """Diff between the last snapshot (if any) and the staging area."""
    staged = [entry for entry in entries if entry.is_staged]
    return build_change_set(
        ChangeSetKind.STAGED, _entry_paths(staged), repo.read_snapshot, repo.read_index
    )


def get_unstaged_change_set(repo, entries: list[StatusEntry]) -> ChangeSet:
    """Diff between the last snapshot and the working copy."""
    unstaged = [entry for entry in entries if entry.is_unstaged]
    return build_change_set(
        ChangeSetKind.UNSTAGED, _entry_paths(unstaged), repo.read_snapshot, repo.read_worktree
    )


def get_initial_change_set(repo) -> ChangeSet:
    """Every tracked-or-trackable file shown as newly added."""
    return build_change_set(
        ChangeSetKind.INITIAL, repo.trackable_files(), _no_content, repo.read_worktree
    )


def select_change_set(repo) -> ChangeSet:
    """Pick the change-set to summarize and synthesize its diff.

    Args:
        repo: A repository handle (see ``commitai.git.repository.Repository``).

    Returns:
        The selected ChangeSet. ``ChangeSetKind.EMPTY`` means there is
        nothing to summarize.

    Raises:
        RepositoryError: If repository metadata cannot be read.
    """
    entries = repo.status()
    has_snapshot = repo.has_snapshot()

    if any(entry.is_staged for entry in entries):
        logger.debug("Using staged changes")
        return get_staged_change_set(repo, entries)

    if has_snapshot:
        if any(entry.is_unstaged for entry in entries):
            logger.debug("No staged changes, using unstaged changes")
            return get_unstaged_change_set(repo, entries)
        return ChangeSet(kind=ChangeSetKind.EMPTY)

    # Without a snapshot, unstaged and initial coincide; listing trackable
    # files also picks up untracked ones.
    logger.debug("No commits yet, treating all files as new")
    change_set = get_initial_change_set(repo)
    if not change_set.paths and not change_set.skipped:
        return ChangeSet(kind=ChangeSetKind.EMPTY)
    return change_set
