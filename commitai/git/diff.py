"""Unified-diff style text synthesis.

Contains:
- synthesize: Build the diff section for one path from its before/after content
- synthesize_record: Same, for a ChangeRecord
- join_sections: Concatenate sections into the full diff text
- add_prefix: Prefix every line of a text block

The comparison is positional: line ``i`` of the old content is compared with
line ``i`` of the new content and nothing is aligned. An insertion near the
top of a file therefore shows every following line as a remove/add pair.
No context lines and no hunk headers are produced; consumers only need the
path in the header and the +/- lines.
"""

from typing import Iterable, Optional

from commitai.git.models import ChangeRecord

DIFF_HEADER_PREFIX = "diff --git "

# Placeholder object ids for the index line. They only need to look like
# abbreviated hashes; nothing resolves them.
NULL_OBJECT_ID = "0000000"
PLACEHOLDER_OBJECT_ID = "xxxxxxx"
FILE_MODE = "100644"


def add_prefix(content: str, prefix: str) -> str:
    """Add ``prefix`` to each line of ``content``.

    An empty trailing line (content ending with a newline) is dropped rather
    than emitted as a bare prefix.

    Args:
        content: Text to prefix.
        prefix: "+" or "-".

    Returns:
        The prefixed lines joined with newlines.
    """
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines = lines[:-1]
    return "\n".join(prefix + line for line in lines)


def _new_file_section(path: str, content: str) -> str:
    header = [
        f"{DIFF_HEADER_PREFIX}a/{path} b/{path}",
        f"new file mode {FILE_MODE}",
        f"index {NULL_OBJECT_ID}..{PLACEHOLDER_OBJECT_ID}",
        "--- /dev/null",
        f"+++ b/{path}",
    ]
    body = add_prefix(content, "+")
    return "\n".join(header + [body]) if body else "\n".join(header)


def _deleted_file_section(path: str, content: str) -> str:
    header = [
        f"{DIFF_HEADER_PREFIX}a/{path} b/{path}",
        f"deleted file mode {FILE_MODE}",
        f"index {PLACEHOLDER_OBJECT_ID}..{NULL_OBJECT_ID}",
        f"--- a/{path}",
        "+++ /dev/null",
    ]
    body = add_prefix(content, "-")
    return "\n".join(header + [body]) if body else "\n".join(header)


def _modified_file_section(path: str, old_content: str, new_content: str) -> str:
    old_lines = old_content.split("\n")
    new_lines = new_content.split("\n")

    diff_lines = [
        f"{DIFF_HEADER_PREFIX}a/{path} b/{path}",
        f"index {PLACEHOLDER_OBJECT_ID}..{PLACEHOLDER_OBJECT_ID} {FILE_MODE}",
        f"--- a/{path}",
        f"+++ b/{path}",
    ]

    for i in range(max(len(old_lines), len(new_lines))):
        old_line = old_lines[i] if i < len(old_lines) else ""
        new_line = new_lines[i] if i < len(new_lines) else ""
        if old_line == new_line:
            continue
        if old_line:
            diff_lines.append("-" + old_line)
        if new_line:
            diff_lines.append("+" + new_line)

    return "\n".join(diff_lines)


def synthesize(path: str, before: Optional[str], after: Optional[str]) -> Optional[str]:
    """Build the diff section for a single path.

    Args:
        path: Repository-relative path used in the header lines.
        before: Content as of the last snapshot, or None for a new file.
        after: Current content, or None for a deleted file.

    Returns:
        The diff section text, or None when there is nothing to show
        (identical content, or both sides absent).
    """
    if before == after:
        return None
    if before is None:
        return _new_file_section(path, after)
    if after is None:
        return _deleted_file_section(path, before)
    return _modified_file_section(path, before, after)


def synthesize_record(record: ChangeRecord) -> Optional[str]:
    """Build the diff section for a ChangeRecord."""
    return synthesize(record.path, record.before, record.after)


def join_sections(sections: Iterable[str]) -> str:
    """Join diff sections into one diff text, one newline between sections."""
    return "\n".join(section for section in sections if section)
