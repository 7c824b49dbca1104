"""Pytest fixtures for gitten tests"""
import tempfile
from pathlib import Path
from types import SimpleNamespace

import git
import pytest


def configure_user(repo):
    """Give a repository a committer identity and disable signing."""
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")
        writer.set_value("tag", "gpgsign", "false")


def init_repo(path, initial_commit=True):
    """Create a repository on branch main, optionally with one commit."""
    path.mkdir(parents=True, exist_ok=True)
    repo = git.Repo.init(path)
    configure_user(repo)
    repo.git.symbolic_ref("HEAD", "refs/heads/main")

    if initial_commit:
        (path / "README.md").write_text("# Test Repository\n")
        repo.index.add(["README.md"])
        repo.index.commit("Initial commit")
    return repo


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def commit_file():
    """Return a helper that writes a file and commits it."""
    def _commit(repo, name, content, message=None):
        path = Path(repo.working_dir) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        repo.index.add([name])
        return repo.index.commit(message or f"Update {name}")
    return _commit


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo = init_repo(temp_dir / "test_repo")
    yield repo
    repo.close()


@pytest.fixture
def empty_repo(temp_dir):
    """Create a repository without any commit (unborn HEAD)."""
    repo = init_repo(temp_dir / "empty_repo", initial_commit=False)
    yield repo
    repo.close()


@pytest.fixture
def remote_setup(temp_dir):
    """A bare remote, an upstream clone that publishes to it and a local clone.

    Both clones start at the same commit on main.
    """
    bare = git.Repo.init(temp_dir / "remote.git", bare=True)
    bare.git.symbolic_ref("HEAD", "refs/heads/main")

    upstream = init_repo(temp_dir / "upstream")
    upstream.create_remote("origin", bare.git_dir)
    upstream.git.push("origin", "main")

    local = git.Repo.clone_from(bare.git_dir, temp_dir / "local")
    configure_user(local)

    yield SimpleNamespace(bare=bare, upstream=upstream, local=local)

    local.close()
    upstream.close()
    bare.close()


@pytest.fixture
def workspace(temp_dir):
    """A workspace root holding a repository, a plain folder and a hidden repository."""
    root = temp_dir / "workspace"
    root.mkdir()

    repo = init_repo(root / "repoA")
    repo.close()
    (root / "plainFolder").mkdir()
    hidden = init_repo(root / ".hidden")
    hidden.close()
    (root / "notes.txt").write_text("not a directory\n")

    return root


@pytest.fixture
def config(workspace):
    """Configuration dictionary pointing at the workspace fixture."""
    return {
        "root_path": str(workspace),
        "watch": False,
        "verbose": False,
        "debug": False,
    }
