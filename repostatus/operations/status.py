"""Status operation: probe one repository for branch, local and remote state."""

import logging
from typing import Optional

from ..core.types import LocalState, RemoteState, ReportRow
from ..utils.git import VersionControlClient, GitClient, remote_of

logger = logging.getLogger('repostatus')

NO_BRANCH = '(no branch)'
ERROR_BRANCH = '(error)'


class StatusOperation:
    """Status operation: build the report row of a single repository."""

    name = "status"
    description = "Report branch, working-tree and upstream state"

    def __init__(self, client: Optional[VersionControlClient] = None, fetch: bool = True):
        """Initialize status operation.

        Args:
            client: Version-control client (default: GitClient)
            fetch: Whether to fetch from remote before comparing with the upstream
        """
        self.client = client or GitClient()
        self.fetch = fetch

    def branch_name(self, repo_path: str) -> str:
        """Get the display branch of a repository, or a placeholder."""
        return self.client.current_branch(repo_path) or NO_BRANCH

    def execute(self, repo_path: str, name: str, branch: Optional[str] = None) -> ReportRow:
        """Execute status operation on a repository.

        Args:
            repo_path: Local path to the repository
            name: Display name of the repository
            branch: Branch already looked up by the caller (looked up again if None)

        Returns:
            ReportRow describing the repository
        """
        if branch is None:
            branch = self.client.current_branch(repo_path)
        elif branch == NO_BRANCH:
            branch = None

        remote = self.remote_state(repo_path, branch)

        local = self.client.working_tree_status(repo_path)
        if local is None:
            logger.warning(f"Could not read working tree status of {name}")
            local = LocalState()

        return ReportRow(
            name=name,
            path=repo_path,
            branch=branch or NO_BRANCH,
            local=local,
            remote=remote
        )

    def remote_state(self, repo_path: str, branch: Optional[str]) -> RemoteState:
        """Compare a branch with its upstream, fetching first if enabled.

        Args:
            repo_path: Local path to the repository
            branch: Current branch, None when HEAD is detached

        Returns:
            RemoteState (no upstream when the branch has none)
        """
        if not branch:
            return RemoteState.no_upstream()

        upstream = self.client.upstream(repo_path, branch)
        if not upstream:
            return RemoteState.no_upstream()

        if self.fetch and not self.client.fetch(repo_path, remote_of(upstream)):
            logger.warning(f"Failed to fetch {upstream} in {repo_path}, using cached remote refs")

        unpulled = self.client.count_exclusive(repo_path, include=upstream, exclude=branch)
        unpushed = self.client.count_exclusive(repo_path, include=branch, exclude=upstream)

        return RemoteState(
            upstream=upstream,
            unpulled=unpulled or 0,
            unpushed=unpushed or 0
        )


def error_row(repo_path: str, name: str) -> ReportRow:
    """Placeholder row for a repository whose probe crashed."""
    return ReportRow(
        name=name,
        path=repo_path,
        branch=ERROR_BRANCH,
        local=LocalState(),
        remote=RemoteState.no_upstream()
    )
