"""Tests for the text command interpreter"""

import pytest

from gitten.constants import (
    MSG_EMPTY_COMMAND,
    MSG_NOT_A_REPOSITORY,
    MSG_REPOSITORY_REQUIRED,
    MSG_UNKNOWN_COMMAND,
)
from gitten.core.commands import CommandContext, CommandInterpreter
from gitten.models.selection import SelectionContext
from gitten.models.workspace import WorkspaceEntry
from gitten.services.git import SyncEngine


@pytest.fixture
def interpreter():
    return CommandInterpreter(SyncEngine())


def entry_for(repo, name="test_repo"):
    return WorkspaceEntry(
        path=repo.working_dir,
        display_name=name,
        is_repository=True,
        active_branch_name=repo.active_branch.name,
    )


def repositories(entry):
    return CommandContext(SelectionContext.REPOSITORIES, entry)


class TestPreconditions:
    """Test refusals before any git operation runs."""

    def test_no_repository_selected(self, interpreter):
        result = interpreter.execute("co main", repositories(None))

        assert result.message == MSG_REPOSITORY_REQUIRED
        assert result.ok is False

    def test_plain_folder_selected(self, interpreter, temp_dir):
        folder = WorkspaceEntry(path=str(temp_dir), display_name="plain")

        result = interpreter.execute("co main", repositories(folder))

        assert result.message == MSG_NOT_A_REPOSITORY

    def test_empty_line(self, interpreter, git_repo):
        result = interpreter.execute("   ", repositories(entry_for(git_repo)))

        assert result.message == MSG_EMPTY_COMMAND
        assert result.ok is False

    def test_unknown_verb(self, interpreter, git_repo):
        result = interpreter.execute("frobnicate", repositories(entry_for(git_repo)))

        assert result.message == MSG_UNKNOWN_COMMAND

    def test_verb_from_other_context(self, interpreter, git_repo):
        result = interpreter.execute("push origin", repositories(entry_for(git_repo)))

        assert result.message == MSG_UNKNOWN_COMMAND

    def test_verbs_per_context(self, interpreter):
        assert sorted(interpreter.verbs(SelectionContext.REPOSITORIES)) == [
            "co", "fetch", "pull", "rh", "tag",
        ]
        assert interpreter.verbs(SelectionContext.BRANCHES) == ["push"]
        assert interpreter.verbs(SelectionContext.TAGS) == ["push"]


class TestRepositoryCommands:
    """Test verbs available in the repositories context."""

    def test_checkout_without_argument(self, interpreter, git_repo):
        """A missing argument is reported and nothing is checked out."""
        result = interpreter.execute("co", repositories(entry_for(git_repo)))

        assert result.ok is False
        assert "must not be empty" in result.message
        assert git_repo.active_branch.name == "main"
        assert [head.name for head in git_repo.heads] == ["main"]

    def test_checkout(self, interpreter, git_repo):
        result = interpreter.execute("co main", repositories(entry_for(git_repo)))

        assert result.ok is True
        assert result.message == "Checkout is successful!"
        assert result.refresh_refs is True

    def test_checkout_new_branch(self, interpreter, git_repo):
        interpreter.execute("co feature", repositories(entry_for(git_repo)))

        assert git_repo.active_branch.name == "feature"

    def test_extra_arguments_are_ignored(self, interpreter, git_repo):
        interpreter.execute("co feature other", repositories(entry_for(git_repo)))

        assert git_repo.active_branch.name == "feature"
        assert "other" not in [head.name for head in git_repo.heads]

    def test_tag(self, interpreter, git_repo):
        result = interpreter.execute("tag v1.0", repositories(entry_for(git_repo)))

        assert result.message == "Tag creation is successful!"
        assert "v1.0" in [tag.name for tag in git_repo.tags]

    def test_reset(self, interpreter, git_repo):
        result = interpreter.execute("rh", repositories(entry_for(git_repo)))

        assert result.message == "Reset Successful!"

    def test_pull(self, interpreter, remote_setup):
        result = interpreter.execute("pull origin", repositories(entry_for(remote_setup.local, "local")))

        assert result.ok is True
        assert result.message == "Nothing to do..."

    def test_pull_unknown_remote_is_reported(self, interpreter, git_repo):
        result = interpreter.execute("pull nowhere", repositories(entry_for(git_repo)))

        assert result.ok is False
        assert result.message.startswith("Error:")

    def test_fetch(self, interpreter, remote_setup):
        result = interpreter.execute("fetch origin", repositories(entry_for(remote_setup.local, "local")))

        assert result.message == "Fetching is done!"

    def test_fetch_without_remote(self, interpreter, git_repo):
        result = interpreter.execute("fetch", repositories(entry_for(git_repo)))

        assert result.ok is False
        assert "Remote name" in result.message


class TestPushCommands:
    """Test push in the branches and tags contexts."""

    def test_push_without_selected_branch(self, interpreter, git_repo):
        context = CommandContext(SelectionContext.BRANCHES, entry_for(git_repo))

        result = interpreter.execute("push origin", context)

        assert result.message == "Please select a branch!"

    def test_push_without_selected_tag(self, interpreter, git_repo):
        context = CommandContext(SelectionContext.TAGS, entry_for(git_repo))

        result = interpreter.execute("push origin", context)

        assert result.message == "Please select a tag!"

    def test_push_selected_branch(self, interpreter, remote_setup, commit_file):
        local = remote_setup.local
        pushed = commit_file(local, "local.txt", "local\n")
        context = CommandContext(SelectionContext.BRANCHES, entry_for(local, "local"), branch="main")

        result = interpreter.execute("push origin", context)

        assert result.message == "Push is successful!"
        assert remote_setup.bare.commit("refs/heads/main").hexsha == pushed.hexsha

    def test_push_selected_tag(self, interpreter, remote_setup):
        local = remote_setup.local
        local.create_tag("v3.0", message="Release v3.0")
        context = CommandContext(SelectionContext.TAGS, entry_for(local, "local"), tag="v3.0")

        result = interpreter.execute("push origin", context)

        assert result.message == "Push is successful!"
        assert "v3.0" in [tag.name for tag in remote_setup.bare.tags]
