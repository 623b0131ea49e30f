"""Ignore filtering of diff text.

Contains:
- split_sections: Split diff text into per-file sections
- extract_section_path: Get the file path from a section header
- filter_diff: Drop sections whose path is matched by a PatternSet
- count_changes: Count added and removed lines
"""

import logging
from typing import Optional

from commitai.git.diff import DIFF_HEADER_PREFIX
from commitai.ignore.patterns import PatternSet

logger = logging.getLogger(__name__)


def split_sections(diff_text: str) -> list[str]:
    """Split diff text at each ``diff --git`` header.

    Text before the first header, if any, becomes its own leading chunk.

    Args:
        diff_text: Full diff text.

    Returns:
        Sections in their original order, without separating newlines.
    """
    if not diff_text:
        return []

    sections = []
    current: list[str] = []
    for line in diff_text.split("\n"):
        if line.startswith(DIFF_HEADER_PREFIX) and current:
            sections.append("\n".join(current))
            current = [line]
        else:
            current.append(line)

    if current:
        sections.append("\n".join(current))
    return sections


def _parse_header_path(header: str) -> Optional[str]:
    rest = header[len(DIFF_HEADER_PREFIX):]

    # "a/<path> b/<path>" with identical paths; this also covers paths
    # containing spaces.
    length, remainder = divmod(len(rest) - 5, 2)
    if length > 0 and remainder == 0 and rest.startswith("a/"):
        old_path = rest[2:2 + length]
        if rest[2 + length:5 + length] == " b/" and rest[5 + length:] == old_path:
            return old_path

    parts = header.split()
    if len(parts) >= 4:
        path = parts[2]
        return path[2:] if path.startswith("a/") else path
    return None


def extract_section_path(section: str) -> Optional[str]:
    """Extract the file path from a diff section's header.

    Args:
        section: One diff section.

    Returns:
        The path with its ``a/`` marker stripped, or None if the section
        has no header.
    """
    for line in section.split("\n"):
        if line.startswith(DIFF_HEADER_PREFIX):
            return _parse_header_path(line)
    return None


def filter_diff(diff_text: str, pattern_set: PatternSet) -> str:
    """Remove sections whose file path is ignored.

    A section is dropped when its path matches any matcher in the set; a
    closer ignore file cannot re-include a path an ancestor file ignores.
    Sections without a recognizable header are dropped too. With an empty
    pattern set the text is returned unchanged.

    Args:
        diff_text: Full diff text.
        pattern_set: Compiled ignore files.

    Returns:
        The filtered diff text, sections kept in their original order.
    """
    if not pattern_set:
        return diff_text

    kept = []
    for section in split_sections(diff_text):
        path = extract_section_path(section)
        if not path:
            continue
        matcher = pattern_set.matching_matcher(path)
        if matcher is not None:
            logger.debug("Ignoring %s (matched %s)", path, matcher.source or matcher.base_dir)
            continue
        kept.append(section)

    return "\n".join(kept)


def count_changes(diff_text: str) -> tuple[int, int]:
    """Count added and removed content lines.

    Header lines (including ``---``/``+++`` path lines) are not counted.

    Returns:
        Tuple of (added, removed).
    """
    added = removed = 0
    for section in split_sections(diff_text):
        in_header = section.startswith(DIFF_HEADER_PREFIX)
        for line in section.split("\n"):
            if in_header:
                if line.startswith("+++ "):
                    in_header = False
                continue
            if line.startswith("+"):
                added += 1
            elif line.startswith("-"):
                removed += 1
    return added, removed
