"""Shared fixtures: throwaway git repositories built with the real git binary."""
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Optional

import pytest

from repostatus.config import Config, PlatformTools


def run_git(*args: str, cwd: Path) -> str:
    result = subprocess.run(
        [
            "git",
            "-c", "user.name=Test",
            "-c", "user.email=test@test.com",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def commit_file(repo: Path, name: str, content: str = "data\n", message: Optional[str] = None) -> None:
    (repo / name).write_text(content)
    run_git("add", name, cwd=repo)
    run_git("commit", "-q", "-m", message or f"Add {name}", cwd=repo)


@pytest.fixture()
def make_repo() -> Callable[..., Path]:
    """Create a repository with one commit on `branch`."""

    def _make(path: Path, branch: str = "main") -> Path:
        path.mkdir(parents=True, exist_ok=True)
        run_git("init", "-q", cwd=path)
        run_git("symbolic-ref", "HEAD", f"refs/heads/{branch}", cwd=path)
        commit_file(path, "README.md", "# Project\n", "Initial commit")
        return path

    return _make


@pytest.fixture()
def add_upstream(tmp_path: Path) -> Callable[[Path], Path]:
    """Give a repository a bare `origin` remote tracking its current branch."""

    def _add(repo: Path) -> Path:
        remote = tmp_path / "remotes" / f"{repo.name}.git"
        remote.parent.mkdir(parents=True, exist_ok=True)
        run_git("clone", "-q", "--bare", str(repo), str(remote), cwd=tmp_path)
        branch = run_git("symbolic-ref", "--short", "HEAD", cwd=repo).strip()
        run_git("remote", "add", "origin", str(remote), cwd=repo)
        run_git("fetch", "-q", "origin", cwd=repo)
        run_git("branch", f"--set-upstream-to=origin/{branch}", cwd=repo)
        return remote

    return _add


@pytest.fixture()
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture()
def make_config() -> Callable[..., Config]:
    def _make(root: Path, **overrides) -> Config:
        values = dict(
            root=str(root.resolve()),
            fetch=False,
            color=False,
            sequential_delay=0,
            platform=PlatformTools.detect(),
        )
        values.update(overrides)
        return Config(**values)

    return _make


@pytest.fixture()
def git() -> Callable[..., str]:
    return run_git


@pytest.fixture()
def commit() -> Callable[..., None]:
    return commit_file
