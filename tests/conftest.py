"""Shared test fixtures and configuration."""

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

import pytest

from commitai.git.exceptions import FileReadError
from commitai.git.models import StatusEntry
from commitai.settings import Settings


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture(autouse=True)
def isolated_config_dir(temp_dir, monkeypatch):
    """Point ~/.commitai at a temporary directory and clear CAI_* variables."""
    config_dir = temp_dir / "home" / ".commitai"
    monkeypatch.setattr("commitai.global_config._CONFIG_DIR", config_dir)
    for name in (
        "CAI_API_URL",
        "CAI_MODEL",
        "CAI_PROVIDER",
        "CAI_API_TOKEN",
        "CAI_LANGUAGE",
        "CAI_PROMPT_TEMPLATE",
        "CAI_TIMEOUT_SECONDS",
        "CAI_MAX_TOKENS",
        "CAI_TEMPERATURE",
        "CAI_IGNORE_FILE",
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "GOOGLE_API_KEY",
        "GROQ_API_KEY",
        "OPENROUTER_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    return config_dir


@pytest.fixture(autouse=True)
def reset_commitai_logger():
    """Undo configure_logging so later tests see records in caplog."""
    yield
    logger = logging.getLogger("commitai")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def settings(isolated_config_dir):
    """Default settings with the config dir inside the temp directory."""
    return Settings(config_dir=isolated_config_dir)


class FakeRepository:
    """In-memory stand-in for commitai.git.repository.Repository.

    ``snapshot``, ``index`` and ``worktree`` map paths to content. A value of
    ``UNREADABLE`` makes the corresponding read raise FileReadError.
    """

    UNREADABLE = object()

    def __init__(
        self,
        root: Path,
        snapshot: Optional[dict] = None,
        index: Optional[dict] = None,
        worktree: Optional[dict] = None,
        entries: Optional[list[StatusEntry]] = None,
        has_commits: bool = True,
        trackable: Optional[list[str]] = None,
    ):
        self.root = Path(root)
        self.snapshot = snapshot or {}
        self.index = index if index is not None else dict(self.snapshot)
        self.worktree = worktree if worktree is not None else dict(self.index)
        self.entries = entries or []
        self.has_commits = has_commits
        self.trackable = trackable
        self.committed: list[str] = []

    def _read(self, store: dict, path: str) -> Optional[str]:
        value = store.get(path)
        if value is self.UNREADABLE:
            raise FileReadError(path, "binary content")
        return value

    def status(self) -> list[StatusEntry]:
        return list(self.entries)

    def has_snapshot(self) -> bool:
        return self.has_commits

    def trackable_files(self) -> list[str]:
        if self.trackable is not None:
            return list(self.trackable)
        return sorted(self.worktree)

    def read_snapshot(self, path: str) -> Optional[str]:
        return self._read(self.snapshot, path)

    def read_index(self, path: str) -> Optional[str]:
        return self._read(self.index, path)

    def read_worktree(self, path: str) -> Optional[str]:
        return self._read(self.worktree, path)

    def commit(self, message: str) -> str:
        self.committed.append(message)
        return ""


@pytest.fixture
def fake_repo_factory(temp_dir):
    """Build FakeRepository instances rooted at a temporary directory."""
    root = temp_dir / "repo"
    root.mkdir()

    def factory(**kwargs) -> FakeRepository:
        return FakeRepository(root, **kwargs)

    return factory


def run_git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True
    )
    return result.stdout


@pytest.fixture
def git():
    """Run git commands in a test repository."""
    return run_git


@pytest.fixture
def git_repo(temp_dir):
    """Create an empty git repository with a local identity."""
    root = temp_dir / "work"
    root.mkdir()
    run_git(root, "init", "-q")
    run_git(root, "config", "user.email", "dev@example.com")
    run_git(root, "config", "user.name", "Dev")
    run_git(root, "config", "commit.gpgsign", "false")
    return root


@pytest.fixture
def sample_diff():
    """Three-section diff as produced by the synthesizer."""
    return "\n".join(
        [
            "diff --git a/app.go b/app.go",
            "index xxxxxxx..xxxxxxx 100644",
            "--- a/app.go",
            "+++ b/app.go",
            "-old",
            "+new",
            "diff --git a/debug.log b/debug.log",
            "new file mode 100644",
            "index 0000000..xxxxxxx",
            "--- /dev/null",
            "+++ b/debug.log",
            "+line one",
            "+line two",
            "diff --git a/docs/guide.md b/docs/guide.md",
            "deleted file mode 100644",
            "index xxxxxxx..0000000",
            "--- a/docs/guide.md",
            "+++ /dev/null",
            "-# Guide",
        ]
    )
