"""Ignore-pattern discovery and diff filtering for commit-ai.

This package provides:
- patterns: IGNORE_FILE_NAME, IgnorePatternError, PatternMatcher, PatternSet,
            compile_patterns, compile_ignore_file, find_ignore_files,
            load_pattern_set, get_ignore_patterns, add_ignore_pattern,
            remove_ignore_pattern
- filter: split_sections, extract_section_path, filter_diff, count_changes
"""

from commitai.ignore.patterns import (
    IGNORE_FILE_NAME,
    IgnorePatternError,
    PatternMatcher,
    PatternSet,
    compile_patterns,
    compile_ignore_file,
    find_ignore_files,
    load_pattern_set,
    get_ignore_patterns,
    add_ignore_pattern,
    remove_ignore_pattern,
)
from commitai.ignore.filter import (
    split_sections,
    extract_section_path,
    filter_diff,
    count_changes,
)


__all__ = [
    # Patterns
    "IGNORE_FILE_NAME",
    "IgnorePatternError",
    "PatternMatcher",
    "PatternSet",
    "compile_patterns",
    "compile_ignore_file",
    "find_ignore_files",
    "load_pattern_set",
    # Ignore file editing
    "get_ignore_patterns",
    "add_ignore_pattern",
    "remove_ignore_pattern",
    # Filter
    "split_sections",
    "extract_section_path",
    "filter_diff",
    "count_changes",
]
