"""Tests for workspace discovery and refresh"""

import os

import git
import pytest

from gitten.exceptions import WorkspaceScanError
from gitten.services.registry import RepositoryRegistry, path_contains


class TestScan:
    """Test listing the workspace root."""

    def test_scan_skips_hidden_and_files(self, workspace):
        entries = RepositoryRegistry().scan(str(workspace))

        assert [entry.display_name for entry in entries] == ["plainFolder", "repoA"]

    def test_scan_describes_entries(self, workspace):
        plain, repo = RepositoryRegistry().scan(str(workspace))

        assert plain.is_repository is False
        assert plain.active_branch_name == ""
        assert plain.changed_file_count == 0

        assert repo.is_repository is True
        assert repo.active_branch_name == "main"
        assert repo.changed_file_count == 0
        assert repo.path == os.path.realpath(workspace / "repoA")

    def test_scan_sorts_case_insensitively(self, workspace):
        (workspace / "Zeta").mkdir()
        (workspace / "alpha").mkdir()

        names = [entry.display_name for entry in RepositoryRegistry().scan(str(workspace))]

        assert names == ["alpha", "plainFolder", "repoA", "Zeta"]

    def test_scan_missing_root_raises(self, temp_dir):
        with pytest.raises(WorkspaceScanError):
            RepositoryRegistry().scan(str(temp_dir / "missing"))

    def test_scan_empty_root(self, temp_dir):
        assert RepositoryRegistry().scan(str(temp_dir)) == []


class TestRefresh:
    """Test refreshing entries after a filesystem change."""

    def test_refresh_updates_changed_count(self, workspace):
        registry = RepositoryRegistry()
        entries = registry.scan(str(workspace))
        repo_entry = entries[1]

        readme = os.path.join(repo_entry.path, "README.md")
        with open(readme, "a") as f:
            f.write("more\n")

        changed = registry.refresh(entries, readme)

        assert changed == [repo_entry]
        assert repo_entry.changed_file_count == 1

    def test_refresh_is_noop_when_nothing_changed(self, workspace):
        registry = RepositoryRegistry()
        entries = registry.scan(str(workspace))
        before = [(e.is_repository, e.active_branch_name, e.changed_file_count) for e in entries]

        changed = registry.refresh(entries, os.path.join(entries[1].path, ".git", "index"))

        assert changed == []
        assert [(e.is_repository, e.active_branch_name, e.changed_file_count) for e in entries] == before

    def test_refresh_picks_up_branch_switch(self, workspace):
        registry = RepositoryRegistry()
        entries = registry.scan(str(workspace))
        repo_entry = entries[1]

        repo = git.Repo(repo_entry.path)
        repo.git.checkout("-b", "feature")
        repo.close()

        registry.refresh(entries, os.path.join(repo_entry.path, ".git", "HEAD"))

        assert repo_entry.active_branch_name == "feature"

    def test_refresh_ignores_unrelated_paths(self, workspace):
        registry = RepositoryRegistry()
        entries = registry.scan(str(workspace))

        assert registry.refresh(entries, str(workspace / "elsewhere" / "file")) == []

    def test_folder_becomes_repository(self, workspace):
        registry = RepositoryRegistry()
        entries = registry.scan(str(workspace))
        plain = entries[0]

        git.Repo.init(plain.path).close()
        changed = registry.refresh(entries, os.path.join(plain.path, ".git"))

        assert changed == [plain]
        assert plain.is_repository is True
        assert plain.active_branch_name == ""


class TestPathContains:
    """Test path containment by whole components."""

    def test_same_path(self):
        assert path_contains("/ws/repo", "/ws/repo")

    def test_child_path(self):
        assert path_contains("/ws/repo", "/ws/repo/.git/HEAD")

    def test_sibling_with_common_prefix(self):
        assert not path_contains("/ws/repo", "/ws/repo2/file")

    def test_trailing_separator(self):
        assert path_contains("/ws/repo/", "/ws/repo/file")
