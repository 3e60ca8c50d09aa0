"""Configuration management for repostatus."""

import os
import sys
from typing import Callable, Optional
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PlatformTools:
    """Host-dependent path helpers, resolved once at start-up."""

    path_resolver: Callable[[str], str]
    directory_namer: Callable[[str], str]

    @classmethod
    def detect(cls, platform: Optional[str] = None) -> 'PlatformTools':
        """Pick path helpers for the given (or current) platform.

        Args:
            platform: Value shaped like `sys.platform` (defaults to the host)

        Returns:
            PlatformTools instance
        """
        platform = platform or sys.platform
        if platform.startswith('win'):
            # realpath on Windows expands mapped drives into UNC paths
            return cls(path_resolver=os.path.abspath, directory_namer=_basename)
        return cls(path_resolver=os.path.realpath, directory_namer=_basename)


def _basename(path: str) -> str:
    return os.path.basename(os.path.normpath(path)) or path


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None


def _env_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value == '':
        return None
    try:
        number = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if number < 1:
        raise ValueError(f"{name} must be at least 1, got {number}")
    return number


@dataclass
class Config:
    """Configuration for a status scan.

    Merges environment variables with CLI arguments.
    CLI arguments take precedence over environment variables.
    """

    root: str
    deep: bool = False
    fetch: bool = True
    quiet: bool = False
    sequential: bool = False
    max_workers: Optional[int] = None
    sequential_delay: float = 0.1
    fetch_timeout: Optional[float] = 30
    git_timeout: Optional[float] = None
    git_executable: str = 'git'
    color: bool = True
    platform: PlatformTools = field(default_factory=PlatformTools.detect)

    @classmethod
    def from_env_and_args(
        cls,
        path: Optional[str] = None,
        deep: bool = False,
        local_only: bool = False,
        quiet: bool = False,
        sequential: bool = False,
        max_workers: Optional[int] = None,
        no_color: bool = False,
        platform: Optional[PlatformTools] = None
    ) -> 'Config':
        """Create config from environment variables and CLI arguments.

        CLI arguments override environment variables.

        Args:
            path: Root directory to scan (default: current directory)
            deep: Search the whole subtree instead of two levels
            local_only: Skip network fetches
            quiet: Hide clean repositories and print a tally
            sequential: Probe one repository at a time
            max_workers: Maximum parallel workers (overrides REPOSTATUS_MAX_WORKERS)
            no_color: Disable ANSI colors (also set by NO_COLOR)
            platform: Path helpers (default: detected from the host)

        Returns:
            Config instance

        Raises:
            ValueError: If an environment variable is malformed
        """
        platform = platform or PlatformTools.detect()
        root = platform.path_resolver(path or os.getcwd())

        if max_workers is not None and max_workers < 1:
            raise ValueError(f"--workers must be at least 1, got {max_workers}")
        final_workers = max_workers or _env_int('REPOSTATUS_MAX_WORKERS')

        return cls(
            root=root,
            deep=deep,
            fetch=not local_only,
            quiet=quiet,
            sequential=sequential,
            max_workers=final_workers,
            sequential_delay=_env_float('REPOSTATUS_SEQUENTIAL_DELAY', 0.1),
            fetch_timeout=_env_float('REPOSTATUS_FETCH_TIMEOUT', 30),
            git_timeout=_env_float('REPOSTATUS_GIT_TIMEOUT', None),
            git_executable=os.getenv('REPOSTATUS_GIT') or 'git',
            color=not (no_color or os.getenv('NO_COLOR')),
            platform=platform
        )
