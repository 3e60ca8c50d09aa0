from __future__ import annotations

import os
from pathlib import Path

import pytest

from repostatus.config import PlatformTools
from repostatus.core.locator import display_name, locate_repositories


def fake_repo(path: Path) -> Path:
    (path / ".git").mkdir(parents=True)
    return path


@pytest.fixture()
def layout(workspace: Path) -> Path:
    fake_repo(workspace / "alpha")
    fake_repo(workspace / "beta")
    fake_repo(workspace / "group" / "nested")
    fake_repo(workspace / "group" / "deeper" / "still")
    (workspace / "plain" / "dir").mkdir(parents=True)
    return workspace


def resolved(*paths: Path) -> set:
    return {os.path.realpath(p) for p in paths}


class TestLocateRepositories:
    def test_shallow_finds_two_levels(self, layout: Path) -> None:
        found = locate_repositories(str(layout))
        assert found == resolved(layout / "alpha", layout / "beta")

    def test_deep_finds_everything(self, layout: Path) -> None:
        found = locate_repositories(str(layout), deep=True)
        assert found == resolved(
            layout / "alpha",
            layout / "beta",
            layout / "group" / "nested",
            layout / "group" / "deeper" / "still",
        )

    def test_root_itself_is_a_repository(self, workspace: Path) -> None:
        fake_repo(workspace)
        fake_repo(workspace / "child")
        assert locate_repositories(str(workspace)) == resolved(workspace, workspace / "child")

    def test_deep_finds_nested_repository_inside_repository(self, workspace: Path) -> None:
        fake_repo(workspace / "outer")
        fake_repo(workspace / "outer" / "vendor" / "inner")
        found = locate_repositories(str(workspace), deep=True)
        assert found == resolved(workspace / "outer", workspace / "outer" / "vendor" / "inner")

    def test_git_file_is_not_a_marker(self, workspace: Path) -> None:
        (workspace / "worktree").mkdir()
        (workspace / "worktree" / ".git").write_text("gitdir: /elsewhere\n")
        assert locate_repositories(str(workspace)) == set()

    def test_empty_root(self, workspace: Path) -> None:
        assert locate_repositories(str(workspace), deep=True) == set()

    def test_missing_root(self, tmp_path: Path) -> None:
        assert locate_repositories(str(tmp_path / "missing")) == set()

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are not enforced for root",
    )
    def test_unreadable_directory_is_skipped(self, layout: Path) -> None:
        locked = layout / "locked"
        fake_repo(locked / "hidden")
        locked.chmod(0)
        try:
            found = locate_repositories(str(layout), deep=True)
        finally:
            locked.chmod(0o755)
        assert os.path.realpath(layout / "alpha") in found
        assert os.path.realpath(locked / "hidden") not in found

    def test_permission_error_is_skipped(self, layout: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        locked = layout / "locked"
        fake_repo(locked / "hidden")
        real_scandir = os.scandir

        def guarded_scandir(path="."):
            if os.path.basename(os.fspath(path)) == "locked":
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", guarded_scandir)
        found = locate_repositories(str(layout), deep=True)

        assert found == resolved(
            layout / "alpha",
            layout / "beta",
            layout / "group" / "nested",
            layout / "group" / "deeper" / "still",
        )

    def test_uses_injected_path_resolver(self, layout: Path) -> None:
        calls = []

        def resolver(path: str) -> str:
            calls.append(path)
            return os.path.abspath(path)

        tools = PlatformTools(path_resolver=resolver, directory_namer=os.path.basename)
        found = locate_repositories(str(layout), platform=tools)
        assert len(found) == 2
        assert calls


class TestDisplayName:
    def test_relative_to_root(self, workspace: Path) -> None:
        assert display_name(str(workspace), str(workspace / "alpha")) == "alpha"
        nested = display_name(str(workspace), str(workspace / "group" / "nested"))
        assert nested == os.path.join("group", "nested")

    def test_root_uses_directory_name(self, workspace: Path) -> None:
        assert display_name(str(workspace), str(workspace)) == "workspace"

    def test_windows_tools(self) -> None:
        tools = PlatformTools.detect("win32")
        assert tools.path_resolver is os.path.abspath
