"""Git command-line client and parsers for its output."""

import subprocess
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..core.types import LocalState

logger = logging.getLogger('repostatus')

# Status codes (either porcelain column) that mean a tracked file changed
MODIFIED_CODES = frozenset('MDRCTU')


def parse_symbolic_ref(output: str) -> Optional[str]:
    """Parse `git symbolic-ref --short -q HEAD` output.

    Args:
        output: Raw stdout of the command

    Returns:
        Branch name, or None when HEAD is detached
    """
    branch = output.strip()
    if branch.startswith('refs/heads/'):
        branch = branch[len('refs/heads/'):]
    return branch or None


def parse_count(output: str) -> int:
    """Parse `git rev-list --count` output.

    Raises:
        ValueError: If the output is not an integer
    """
    return int(output.strip())


def parse_status_porcelain(output: str) -> LocalState:
    """Derive local working-tree flags from `git status --porcelain` output.

    Args:
        output: Raw stdout, one `XY path` entry per line

    Returns:
        LocalState with the untracked/new/modified flags set
    """
    untracked = new = modified = False
    for line in output.splitlines():
        if len(line) < 2:
            continue
        index, worktree = line[0], line[1]
        if line.startswith('??'):
            untracked = True
            continue
        if line.startswith('!!'):
            continue
        if index == 'A':
            new = True
        if index in MODIFIED_CODES or worktree in MODIFIED_CODES:
            modified = True
    return LocalState(
        has_untracked=untracked,
        has_new_staged=new,
        has_modified=modified
    )


def remote_of(upstream: str) -> Optional[str]:
    """Extract the remote name from an upstream ref such as 'origin/main'.

    Returns:
        Remote name, or None for a local upstream ('./main' style refs)
    """
    if '/' not in upstream:
        return None
    remote = upstream.split('/', 1)[0]
    return None if remote in ('', '.') else remote


class VersionControlClient(ABC):
    """The version-control operations a status probe relies on."""

    @abstractmethod
    def current_branch(self, repo_path: str) -> Optional[str]:
        pass

    @abstractmethod
    def upstream(self, repo_path: str, branch: str) -> Optional[str]:
        pass

    @abstractmethod
    def count_exclusive(self, repo_path: str, include: str, exclude: str) -> Optional[int]:
        pass

    @abstractmethod
    def fetch(self, repo_path: str, remote: Optional[str] = None) -> bool:
        pass

    @abstractmethod
    def working_tree_status(self, repo_path: str) -> Optional[LocalState]:
        pass


class GitClient(VersionControlClient):
    """Thin wrapper over the git executable for status probes.

    Every method maps subprocess failures to None/False instead of raising,
    so a broken repository degrades its own row only.
    """

    def __init__(
        self,
        executable: str = 'git',
        timeout: Optional[float] = None,
        fetch_timeout: Optional[float] = 30
    ):
        """Initialize git client.

        Args:
            executable: Name or path of the git binary
            timeout: Timeout in seconds for read-only commands (None = wait forever)
            fetch_timeout: Timeout in seconds for network fetches
        """
        self.executable = executable
        self.timeout = timeout
        self.fetch_timeout = fetch_timeout

    def _run(self, repo_path: str, args: List[str], timeout: Optional[float] = None) -> Optional[str]:
        """Run a git command and return its stdout, or None on failure."""
        try:
            result = subprocess.run(
                [self.executable] + args,
                cwd=repo_path,
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                check=True,
                timeout=timeout if timeout is not None else self.timeout
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            logger.debug(f"git {' '.join(args)} failed in {repo_path}: {e.stderr.strip() if e.stderr else e}")
            return None
        except subprocess.TimeoutExpired:
            logger.warning(f"git {' '.join(args)} timed out in {repo_path}")
            return None
        except (FileNotFoundError, NotADirectoryError, PermissionError) as e:
            logger.warning(f"Could not run git in {repo_path}: {e}")
            return None

    def current_branch(self, repo_path: str) -> Optional[str]:
        """Get the branch HEAD points at.

        Returns:
            Branch name or None if HEAD is detached or unreadable
        """
        output = self._run(repo_path, ["symbolic-ref", "--short", "-q", "HEAD"])
        if output is None:
            return None
        return parse_symbolic_ref(output)

    def upstream(self, repo_path: str, branch: str) -> Optional[str]:
        """Get the upstream ref configured for a branch.

        Returns:
            Upstream name (e.g., 'origin/main') or None if there is none
        """
        output = self._run(
            repo_path,
            ["rev-parse", "--abbrev-ref", "--symbolic-full-name", f"{branch}@{{upstream}}"]
        )
        if output is None:
            return None
        return output.strip() or None

    def count_exclusive(self, repo_path: str, include: str, exclude: str) -> Optional[int]:
        """Count commits reachable from `include` but not from `exclude`.

        Returns:
            Commit count or None if git failed
        """
        output = self._run(repo_path, ["rev-list", "--count", f"{exclude}..{include}"])
        if output is None:
            return None
        try:
            return parse_count(output)
        except ValueError:
            logger.warning(f"Unexpected rev-list output in {repo_path}: {output!r}")
            return None

    def fetch(self, repo_path: str, remote: Optional[str] = None) -> bool:
        """Fetch from the remote.

        Returns:
            True if the fetch succeeded, False otherwise
        """
        args = ["fetch", "--quiet"]
        if remote:
            args.append(remote)
        return self._run(repo_path, args, timeout=self.fetch_timeout) is not None

    def working_tree_status(self, repo_path: str) -> Optional[LocalState]:
        """Get the working-tree flags of a repository.

        Returns:
            LocalState or None if the status could not be read
        """
        output = self._run(repo_path, ["status", "--porcelain"])
        if output is None:
            return None
        return parse_status_porcelain(output)
