"""Discovery and compilation of .caiignore files.

Contains:
- IGNORE_FILE_NAME: The ignore file name looked up in each directory
- IgnorePatternError: Raised when an ignore file cannot be compiled
- PatternMatcher: Compiled rules of one ignore file
- PatternSet: All matchers that apply to a directory
- compile_patterns / compile_ignore_file: Build a PatternMatcher
- find_ignore_files / load_pattern_set: Walk upward and collect matchers
- get_ignore_patterns / add_ignore_pattern / remove_ignore_pattern: Edit one file

Each matcher follows gitignore rules within its own file: later rules win
and ``!`` re-includes. Across files there is no override: a path hidden by
any file stays hidden, whatever a closer file says.
"""

import logging
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, Optional

import pathspec

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".caiignore"


class IgnorePatternError(Exception):
    """Raised when an ignore file cannot be read or contains invalid patterns."""

    pass


def _clean_lines(lines: Iterable[str]) -> list[str]:
    """Drop blank lines and comments, keep everything else verbatim."""
    cleaned = []
    for line in lines:
        line = line.rstrip("\r\n")
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        cleaned.append(line.rstrip())
    return cleaned


class PatternMatcher:
    """Compiled rules of a single ignore file.

    Attributes:
        source: Path of the ignore file (None for in-memory patterns).
        base_dir: Directory the rules are relative to.
        patterns: The effective pattern lines, in file order.
    """

    def __init__(self, patterns: list[str], base_dir: Path, source: Optional[Path] = None):
        self.patterns = patterns
        self.base_dir = Path(base_dir)
        self.source = source
        try:
            self._spec = pathspec.GitIgnoreSpec.from_lines(patterns)
        except (ValueError, TypeError) as e:
            where = source or base_dir
            raise IgnorePatternError(f"Invalid ignore pattern in {where}: {e}") from e

    def __repr__(self) -> str:
        return f"PatternMatcher(source={self.source!s}, patterns={len(self.patterns)})"

    def matches(self, path: str) -> bool:
        """Check a path relative to ``base_dir`` against the rules.

        Args:
            path: POSIX path relative to this matcher's directory.

        Returns:
            True if the last matching rule ignores the path.
        """
        if not self.patterns or not path:
            return False
        return self._spec.match_file(path)

    def matches_under(self, path: str, root: Path) -> bool:
        """Check a path given relative to ``root``.

        Paths outside this matcher's directory never match.
        """
        absolute = Path(root).joinpath(*PurePosixPath(path).parts)
        try:
            relative = absolute.relative_to(self.base_dir)
        except ValueError:
            return False
        return self.matches(relative.as_posix())


class PatternSet:
    """Ordered collection of matchers, closest directory first.

    Attributes:
        root: Directory that the paths passed to ``matches`` are relative to.
        matchers: The compiled ignore files.
    """

    def __init__(self, matchers: Optional[list[PatternMatcher]] = None, root: Optional[Path] = None):
        self.matchers = list(matchers or [])
        self.root = Path(root) if root is not None else None

    def __len__(self) -> int:
        return len(self.matchers)

    def __iter__(self) -> Iterator[PatternMatcher]:
        return iter(self.matchers)

    def __bool__(self) -> bool:
        return bool(self.matchers)

    @property
    def sources(self) -> list[Path]:
        return [m.source for m in self.matchers if m.source is not None]

    def matching_matcher(self, path: str) -> Optional[PatternMatcher]:
        """Return the first matcher that ignores ``path``, or None."""
        for matcher in self.matchers:
            if self.root is None:
                if matcher.matches(path):
                    return matcher
            elif matcher.matches_under(path, self.root):
                return matcher
        return None

    def matches(self, path: str) -> bool:
        """Return True if any matcher ignores ``path``."""
        return self.matching_matcher(path) is not None


def compile_patterns(
    lines: Iterable[str], base_dir: Path, source: Optional[Path] = None
) -> PatternMatcher:
    """Compile pattern lines into a matcher.

    Raises:
        IgnorePatternError: If a pattern is malformed.
    """
    return PatternMatcher(_clean_lines(lines), base_dir=base_dir, source=source)


def compile_ignore_file(path: Path) -> PatternMatcher:
    """Read and compile one ignore file.

    Args:
        path: Path to the ignore file.

    Returns:
        The compiled matcher, relative to the file's directory.

    Raises:
        IgnorePatternError: If the file cannot be read or compiled.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IgnorePatternError(f"Failed to read ignore file {path}: {e}") from e
    return compile_patterns(content.splitlines(), base_dir=path.parent, source=path)


def find_ignore_files(
    start_dir: Path,
    stop_at: Optional[Path] = None,
    file_name: str = IGNORE_FILE_NAME,
) -> list[Path]:
    """Collect ignore files from ``start_dir`` upward.

    The walk stops after ``stop_at`` has been visited, or at the filesystem
    root when ``stop_at`` is None or is not an ancestor of ``start_dir``.

    Returns:
        Ignore file paths, closest directory first.
    """
    current = Path(start_dir).resolve()
    if current.is_file():
        current = current.parent
    boundary = Path(stop_at).resolve() if stop_at is not None else None

    found = []
    while True:
        candidate = current / file_name
        if candidate.is_file():
            found.append(candidate)

        if boundary is not None and current == boundary:
            break
        parent = current.parent
        if parent == current:
            break
        current = parent

    return found


def load_pattern_set(
    start_dir: Path,
    stop_at: Optional[Path] = None,
    root: Optional[Path] = None,
    file_name: str = IGNORE_FILE_NAME,
) -> PatternSet:
    """Discover and compile every ignore file that applies to ``start_dir``.

    Args:
        start_dir: Directory to start the upward walk from.
        stop_at: Last directory to visit (normally the repository root).
        root: Directory that filtered paths are relative to. Defaults to
            ``stop_at``, then ``start_dir``.
        file_name: Ignore file name to look for.

    Returns:
        A fresh PatternSet, closest directory first.

    Raises:
        IgnorePatternError: If any discovered file fails to compile.
    """
    start = Path(start_dir).resolve()
    if start.is_file():
        start = start.parent
    root_dir = Path(root or stop_at or start).resolve()

    matchers = []
    for ignore_file in find_ignore_files(start, stop_at=stop_at, file_name=file_name):
        matcher = compile_ignore_file(ignore_file)
        logger.debug("Loaded %d pattern(s) from %s", len(matcher.patterns), ignore_file)
        matchers.append(matcher)

    return PatternSet(matchers, root=root_dir)


def get_ignore_patterns(directory: Path, file_name: str = IGNORE_FILE_NAME) -> list[str]:
    """Get the effective patterns of the ignore file in ``directory``.

    Returns:
        Pattern lines without comments or blanks. Empty if there is no file.
    """
    path = Path(directory) / file_name
    if not path.is_file():
        return []
    try:
        return _clean_lines(path.read_text(encoding="utf-8").splitlines())
    except (OSError, UnicodeDecodeError) as e:
        raise IgnorePatternError(f"Failed to read ignore file {path}: {e}") from e


def add_ignore_pattern(directory: Path, pattern: str, file_name: str = IGNORE_FILE_NAME) -> bool:
    """Append a pattern to the ignore file in ``directory``.

    The file is created if needed. The pattern is validated before writing.

    Returns:
        True if the pattern was added, False if it was already present.

    Raises:
        IgnorePatternError: If the pattern is invalid or the file cannot be written.
    """
    pattern = pattern.strip()
    if pattern in get_ignore_patterns(directory, file_name):
        return False
    compile_patterns([pattern], base_dir=Path(directory))

    path = Path(directory) / file_name
    try:
        existing = path.read_text(encoding="utf-8") if path.is_file() else ""
        if existing and not existing.endswith("\n"):
            existing += "\n"
        path.write_text(f"{existing}{pattern}\n", encoding="utf-8")
    except OSError as e:
        raise IgnorePatternError(f"Failed to write ignore file {path}: {e}") from e
    return True


def remove_ignore_pattern(directory: Path, pattern: str, file_name: str = IGNORE_FILE_NAME) -> bool:
    """Remove every line equal to ``pattern`` from the ignore file.

    Comments and other lines are kept as they are.

    Returns:
        True if the pattern was found and removed, False otherwise.
    """
    pattern = pattern.strip()
    path = Path(directory) / file_name
    if not path.is_file():
        return False
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise IgnorePatternError(f"Failed to read ignore file {path}: {e}") from e

    kept = [line for line in lines if line.strip() != pattern]
    if len(kept) == len(lines):
        return False
    try:
        path.write_text("".join(f"{line}\n" for line in kept), encoding="utf-8")
    except OSError as e:
        raise IgnorePatternError(f"Failed to write ignore file {path}: {e}") from e
    return True
