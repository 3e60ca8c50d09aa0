"""Repository manager for orchestrating status scans."""

import sys
import time
import logging
import threading
from typing import List, Optional, TextIO, Tuple
from concurrent.futures import ThreadPoolExecutor, as_completed

from .locator import locate_repositories, display_name
from .types import ReportRow
from ..config import Config
from ..operations.status import ERROR_BRANCH, StatusOperation, error_row
from ..utils.git import GitClient, VersionControlClient
from ..utils.table import RowTemplate, render_row, render_tally, RESET

logger = logging.getLogger('repostatus')


class RepoManager:
    """Manager for scanning repositories and printing their status table."""

    def __init__(
        self,
        config: Config,
        client: Optional[VersionControlClient] = None,
        out: Optional[TextIO] = None
    ):
        """Initialize repository manager.

        Args:
            config: Scan configuration
            client: Version-control client (default: GitClient built from config)
            out: Stream the table is written to (default: sys.stdout)
        """
        self.config = config
        self.client = client or GitClient(
            executable=config.git_executable,
            timeout=config.git_timeout,
            fetch_timeout=config.fetch_timeout
        )
        self.out = out
        self._write_lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self.out if self.out is not None else sys.stdout

    def discover(self) -> List[Tuple[str, str]]:
        """List repositories as (display name, path) pairs, sorted by name."""
        paths = locate_repositories(self.config.root, self.config.deep, self.config.platform)
        return sorted(
            (display_name(self.config.root, path, self.config.platform), path)
            for path in paths
        )

    def run(self) -> List[ReportRow]:
        """Scan the root and print one row per repository.

        Returns:
            Report rows of every repository checked (hidden rows included)
        """
        repos = self.discover()
        if not repos:
            logger.info(f"No repositories found under {self.config.root}")
            return []

        operation = StatusOperation(client=self.client, fetch=self.config.fetch)
        logger.info(f"Executing operation: {operation.name}")
        logger.info(f"Description: {operation.description}")
        logger.info(f"Total repositories: {len(repos)}")

        branches = [self._branch_for(operation, name, path) for name, path in repos]
        template = RowTemplate.from_names([name for name, _ in repos], branches)

        self._write(template.header())
        self._write(template.divider())

        jobs = [(name, path, branch) for (name, path), branch in zip(repos, branches)]
        try:
            if self.config.sequential:
                logger.info("Using sequential processing")
                results = self._execute_sequential(operation, jobs, template)
            else:
                results = self._execute_parallel(operation, jobs, template)

            if self.config.quiet:
                self._write(render_tally(len(results)))
        finally:
            if self.config.color:
                self._write(RESET, newline=False)

        return results

    def _execute_parallel(
        self,
        operation: StatusOperation,
        jobs: List[Tuple[str, str, str]],
        template: RowTemplate
    ) -> List[ReportRow]:
        """Probe repositories in parallel, printing each row as it completes.

        Args:
            operation: Status operation instance
            jobs: (name, path, branch) per repository
            template: Shared column widths

        Returns:
            List of report rows in completion order
        """
        max_workers = self.config.max_workers or len(jobs)
        logger.info(f"Using parallel processing with {max_workers} workers")

        results = []
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(self._process_repo, operation, job, template)
                for job in jobs
            ]
            for future in as_completed(futures):
                results.append(future.result())

        return results

    def _execute_sequential(
        self,
        operation: StatusOperation,
        jobs: List[Tuple[str, str, str]],
        template: RowTemplate
    ) -> List[ReportRow]:
        """Probe repositories one at a time with a short pause in between.

        Args:
            operation: Status operation instance
            jobs: (name, path, branch) per repository
            template: Shared column widths

        Returns:
            List of report rows in dispatch order
        """
        results = []
        for index, job in enumerate(jobs):
            if index and self.config.sequential_delay > 0:
                time.sleep(self.config.sequential_delay)
            results.append(self._process_repo(operation, job, template))

        return results

    def _branch_for(self, operation: StatusOperation, name: str, path: str) -> str:
        """Look up the branch shown in the table, or the error placeholder."""
        try:
            return operation.branch_name(path)
        except Exception as e:
            logger.error(f"Unexpected error reading the branch of {name}: {e}", exc_info=True)
            return ERROR_BRANCH

    def _process_repo(
        self,
        operation: StatusOperation,
        job: Tuple[str, str, str],
        template: RowTemplate
    ) -> ReportRow:
        """Probe a single repository and print its row.

        Args:
            operation: Status operation instance
            job: (name, path, branch) of the repository
            template: Shared column widths

        Returns:
            Report row
        """
        name, path, branch = job
        if branch == ERROR_BRANCH:
            row = error_row(path, name)
        else:
            try:
                row = operation.execute(path, name, branch)
            except Exception as e:
                logger.error(f"Unexpected error processing {name}: {e}", exc_info=True)
                row = error_row(path, name)

        if not (self.config.quiet and row.clean):
            self._write(render_row(row, template, color=self.config.color))

        return row

    def _write(self, text: str, newline: bool = True) -> None:
        """Write one whole line to the output stream under the lock."""
        with self._write_lock:
            self.stream.write(text + ('\n' if newline else ''))
            self.stream.flush()
