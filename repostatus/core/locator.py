"""Discovery of git repositories below a root directory."""

import os
import logging
from typing import Optional, Set

from ..config import PlatformTools

logger = logging.getLogger('repostatus')

GIT_MARKER = '.git'

# root/.git and root/<repo>/.git
SHALLOW_DEPTH = 2


def locate_repositories(
    root: str,
    deep: bool = False,
    platform: Optional[PlatformTools] = None
) -> Set[str]:
    """Find every directory that holds a `.git` directory.

    Args:
        root: Directory to search from
        deep: Walk the whole subtree instead of two levels
        platform: Path helpers (default: detected from the host)

    Returns:
        Set of resolved repository paths (empty if nothing was found)
    """
    platform = platform or PlatformTools.detect()
    root = platform.path_resolver(root)
    repos: Set[str] = set()

    def on_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory: {error}")

    for dirpath, dirnames, _ in os.walk(root, onerror=on_error):
        if GIT_MARKER in dirnames:
            if os.path.isdir(os.path.join(dirpath, GIT_MARKER)):
                repos.add(platform.path_resolver(dirpath))
            dirnames.remove(GIT_MARKER)

        # depth of the markers found in the children of dirpath
        depth = _depth(root, dirpath) + 2
        if not deep and depth > SHALLOW_DEPTH:
            dirnames[:] = []

    logger.info(f"Found {len(repos)} repositories under {root}")
    return repos


def _depth(root: str, path: str) -> int:
    rel = os.path.relpath(path, root)
    if rel == os.curdir:
        return 0
    return rel.count(os.sep) + 1


def display_name(root: str, repo_path: str, platform: Optional[PlatformTools] = None) -> str:
    """Name shown in the Repository column.

    Args:
        root: Scanned root directory
        repo_path: Repository directory

    Returns:
        Path relative to the root, or the root's own name for the root itself
    """
    platform = platform or PlatformTools.detect()
    rel = os.path.relpath(repo_path, root)
    if rel == os.curdir:
        return platform.directory_namer(repo_path)
    return rel
