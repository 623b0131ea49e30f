"""AI-powered commit message generator built on git diffs."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("commit-ai")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
