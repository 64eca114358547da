"""Environment-driven configuration for ensek-check.

Values come from process environment variables, optionally seeded from a
``.env`` file. The project-root ``.env`` is tried first, then one in the
current working directory. Values from ``.env`` win over the process
environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://qacandidatetest.ensek.io"
DEFAULT_USERNAME = "test"
DEFAULT_PASSWORD = "testing"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_SETTLE_DELAY_SECONDS = 1.0


class ConfigurationError(ValueError):
    """Raised when an environment setting cannot be interpreted."""


def _get_project_root() -> Path:
    """Determine the project root directory."""
    # ensek_check/runtime/config.py -> ensek_check/runtime -> ensek_check -> project root
    return Path(__file__).resolve().parent.parent.parent


def find_env_file(search_dirs: tuple[Path, ...] | None = None) -> Path | None:
    """Return the first ``.env`` file found, or None.

    Args:
        search_dirs: Directories to search in order. Defaults to the project
            root followed by the current working directory.
    """
    if search_dirs is None:
        search_dirs = (_get_project_root(), Path.cwd())
    for directory in search_dirs:
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def load_env_file(env_file: Path | None = None) -> Path | None:
    """Load a ``.env`` file into the process environment.

    A missing file is not an error; ``.env`` is optional.

    Returns:
        The path that was loaded, or None when nothing was found.
    """
    path = env_file if env_file is not None else find_env_file()
    if path is None or not path.is_file():
        return None
    load_dotenv(path, override=True)
    return path


def _env_str(key: str, default: str) -> str:
    value = os.environ.get(key)
    return value if value is not None else default


def _env_float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be a number of seconds, got {raw!r}") from e
    if value < 0:
        raise ConfigurationError(f"{key} must not be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class EnsekSettings:
    """Connection and timing settings for the ENSEK API."""

    base_url: str = DEFAULT_BASE_URL
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    # Pause between a buy and the orders read that verifies it.
    settle_delay: float = DEFAULT_SETTLE_DELAY_SECONDS

    @classmethod
    def from_env(cls) -> EnsekSettings:
        """Build settings from the current process environment."""
        return cls(
            base_url=_env_str("ENSEK_BASE_URL", DEFAULT_BASE_URL),
            username=_env_str("ENSEK_USERNAME", DEFAULT_USERNAME),
            password=_env_str("ENSEK_PASSWORD", DEFAULT_PASSWORD),
            timeout=_env_float("ENSEK_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
            settle_delay=_env_float("ENSEK_SETTLE_DELAY", DEFAULT_SETTLE_DELAY_SECONDS),
        )


def describe_settings(settings: EnsekSettings) -> list[str]:
    """Return display lines for the settings with secrets masked."""
    return [
        "ENSEK Configuration:",
        f"  Base URL: {settings.base_url}",
        f"  Username: {settings.username}",
        f"  Password: {'[CONFIGURED]' if settings.password else '[MISSING]'}",
        f"  Timeout: {settings.timeout:g}s",
        f"  Settle delay: {settings.settle_delay:g}s",
    ]


_settings: EnsekSettings | None = None


def get_settings() -> EnsekSettings:
    """Get the singleton settings, loading ``.env`` on first use."""
    global _settings
    if _settings is None:
        load_env_file()
        _settings = EnsekSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
