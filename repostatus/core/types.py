"""Core types for repository status reports."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class Severity(IntEnum):
    """Ordered severity of a repository's status; drives the row color."""
    CLEAN = 0
    REMOTE_ONLY = 1
    LOCAL_DIRTY = 2


@dataclass(frozen=True)
class LocalState:
    """Working-tree flags derived from `git status --porcelain`."""
    has_untracked: bool = False
    has_new_staged: bool = False
    has_modified: bool = False

    @property
    def dirty(self) -> bool:
        """Check if any local flag is set."""
        return self.has_untracked or self.has_new_staged or self.has_modified

    @property
    def flags(self) -> str:
        """Two-character flag string, e.g. '? ', '+M' or '  '."""
        flags = [
            ch for ch, on in (
                ('?', self.has_untracked),
                ('+', self.has_new_staged),
                ('M', self.has_modified),
            ) if on
        ]
        if len(flags) > 2:
            flags = flags[1:]
        return ''.join(flags).ljust(2)


@dataclass(frozen=True)
class RemoteState:
    """Divergence from the upstream of the current branch.

    `unpulled` counts commits reachable from the upstream but not from the
    local branch; `unpushed` counts the reverse. Both are None when the
    branch has no upstream.
    """
    upstream: Optional[str] = None
    unpulled: Optional[int] = None
    unpushed: Optional[int] = None

    @classmethod
    def no_upstream(cls) -> 'RemoteState':
        return cls()

    @property
    def has_upstream(self) -> bool:
        return self.upstream is not None

    @property
    def dirty(self) -> bool:
        """Check if the branch differs from its upstream in either direction."""
        return bool(self.unpulled) or bool(self.unpushed)

    @property
    def flags(self) -> str:
        """Two-character flag string: '--' without upstream, else 'v'/'^' slots."""
        if not self.has_upstream:
            return '--'
        flags = ''
        if self.unpulled:
            flags += 'v'
        if self.unpushed:
            flags += '^'
        return flags.ljust(2)


def compute_severity(local: LocalState, remote: RemoteState) -> Severity:
    """Local changes always dominate remote divergence."""
    if local.dirty:
        return Severity.LOCAL_DIRTY
    if remote.dirty:
        return Severity.REMOTE_ONLY
    return Severity.CLEAN


@dataclass(frozen=True)
class ReportRow:
    """One rendered line of the status table."""
    name: str
    path: str
    branch: str
    local: LocalState
    remote: RemoteState

    @property
    def local_flags(self) -> str:
        return self.local.flags

    @property
    def remote_flags(self) -> str:
        return self.remote.flags

    @property
    def severity(self) -> Severity:
        return compute_severity(self.local, self.remote)

    @property
    def clean(self) -> bool:
        """Check if the row would be hidden in quiet mode."""
        return self.severity == Severity.CLEAN
