"""Synchronization workflows: fetch, merge analysis, push, checkout, tag, reset"""

from contextlib import contextmanager
from typing import Optional, Union, TYPE_CHECKING

import git
from git.remote import PushInfo

from gitten.exceptions import (
    AuthError,
    GitOperationError,
    NetworkError,
    RefNotFoundError,
)
from gitten.logging_config import get_logger
from gitten.models.outcome import MergeOutcome, SyncResult
from gitten.services.git.credentials import (
    CredentialType,
    parse_remote_url,
    resolve_credentials,
)
from gitten.services.git.repository import RepositoryQueries

if TYPE_CHECKING:
    from gitten.config import Config

logger = get_logger(__name__)

AUTH_MARKERS = (
    "permission denied",
    "authentication failed",
    "could not read username",
    "could not read password",
    "terminal prompts disabled",
    "host key verification failed",
    "access denied",
)
NETWORK_MARKERS = (
    "could not resolve host",
    "unable to access",
    "connection refused",
    "connection timed out",
    "network is unreachable",
    "could not read from remote repository",
    "does not appear to be a git repository",
    "repository not found",
)
PUSH_FAILURE_FLAGS = (
    PushInfo.ERROR | PushInfo.REJECTED | PushInfo.REMOTE_REJECTED | PushInfo.REMOTE_FAILURE
)


def _stderr_text(error: git.exc.GitCommandError) -> str:
    """The git process' stderr without GitPython's decoration."""
    text = str(error.stderr or "").strip()
    if text.startswith("stderr:"):
        text = text[len("stderr:"):].strip()
        if len(text) >= 2 and text[0] == text[-1] == "'":
            text = text[1:-1]
    return text.strip()


def _first_line(text: str) -> str:
    for line in text.splitlines():
        line = line.strip()
        for prefix in ("fatal:", "error:"):
            if line.startswith(prefix):
                line = line[len(prefix):].strip()
        if line:
            return line
    return ""


def translate_git_error(
    operation: str, ref: Optional[str], error: git.exc.GitCommandError
) -> GitOperationError:
    """Map a failed git command onto the gitten error taxonomy."""
    stderr = _stderr_text(error)
    lowered = stderr.lower()
    message = _first_line(stderr) or f"git exited with status {error.status}"

    if any(marker in lowered for marker in AUTH_MARKERS):
        return AuthError(operation, ref, message)
    if any(marker in lowered for marker in NETWORK_MARKERS):
        return NetworkError(operation, ref, message)
    if "couldn't find remote ref" in lowered:
        return RefNotFoundError(operation, ref or "", message)
    return GitOperationError(operation, ref, message)


class SyncEngine(RepositoryQueries):
    """Version-control operations issued by the command interpreter.

    Every operation is a blocking call that either completes or raises a
    GitOperationError subclass; nothing is retried.
    """

    def __init__(self, config: Union["Config", dict, None] = None):
        super().__init__(config)
        self.ssh_key_path = self.config.get("ssh_key_path", None)

    def _find_head(self, repo: git.Repo, branch_name: str) -> Optional[git.Head]:
        return next((head for head in repo.heads if head.name == branch_name), None)

    def _find_remote(self, repo: git.Repo, remote_name: str) -> git.Remote:
        try:
            return repo.remote(remote_name)
        except ValueError:
            raise RefNotFoundError("find_remote", remote_name, "Remote not found")

    def _remote_environment(self, remote: git.Remote) -> dict:
        """Environment for git processes talking to ``remote``.

        Prompts are disabled so a missing credential fails instead of
        blocking the terminal. SSH transports get the resolved key.
        """
        env = {"GIT_TERMINAL_PROMPT": "0"}
        url = parse_remote_url(remote.url)
        if url.requested_types & CredentialType.SSH_KEY:
            credential = resolve_credentials(url.username, url.requested_types, self.ssh_key_path)
            logger.debug(f"Using SSH key {credential.private_key} for {credential.username}")
            env["GIT_SSH_COMMAND"] = credential.ssh_command()
        return env

    @contextmanager
    def _remote_operation(self, repo: git.Repo, remote: git.Remote, operation: str):
        """Run a transport operation with credentials and translated errors."""
        env = self._remote_environment(remote)
        try:
            with repo.git.custom_environment(**env):
                yield
        except git.exc.GitCommandError as e:
            raise translate_git_error(operation, remote.name, e) from e

    def fetch(self, repo: git.Repo, remote_name: str, branch_name: str) -> SyncResult:
        """Fetch ``branch_name`` from the remote and merge it into HEAD.

        Fast-forwards force the working tree to the fetched commit, which
        discards uncommitted local modifications.
        """
        if not branch_name:
            raise RefNotFoundError("fetch", remote_name, "No branch to pull")

        remote = self._find_remote(repo, remote_name)
        logger.debug(f"Fetching {branch_name} from {remote_name}")
        with self._remote_operation(repo, remote, "fetch"):
            remote.fetch(refspec=branch_name, tags=True)

        tracking = f"refs/remotes/{remote_name}/{branch_name}"
        try:
            fetched = repo.commit(tracking)
        except (git.exc.BadName, ValueError):
            raise RefNotFoundError("fetch", f"{remote_name}/{branch_name}", "Could not find remote branch")

        return self.merge(repo, branch_name, fetched)

    def merge(self, repo: git.Repo, branch_name: str, fetched: git.Commit) -> SyncResult:
        """Classify the fetched commit against HEAD and apply the matching merge."""
        if not repo.head.is_valid() or self._find_head(repo, branch_name) is None:
            return self._create_from_fetched(repo, branch_name, fetched)

        local = repo.head.commit
        if local == fetched or repo.is_ancestor(fetched, local):
            logger.debug(f"{branch_name} already contains {fetched.hexsha}")
            return SyncResult("Nothing to do...", MergeOutcome.UP_TO_DATE, local.hexsha)

        if repo.is_ancestor(local, fetched):
            return self._fast_forward(repo, branch_name, fetched)

        return self._normal_merge(repo, local, fetched)

    def _fast_forward(self, repo: git.Repo, branch_name: str, fetched: git.Commit) -> SyncResult:
        head = self._find_head(repo, branch_name)
        head.set_commit(fetched, logmsg=f"Fast-Forward: Setting {head.path} to id: {fetched.hexsha}")
        repo.head.reference = head
        repo.head.reset(index=True, working_tree=True)
        logger.debug(f"Fast-forwarded {branch_name} to {fetched.hexsha}")
        return SyncResult("Doing a fast forward", MergeOutcome.FAST_FORWARD, fetched.hexsha)

    def _create_from_fetched(self, repo: git.Repo, branch_name: str, fetched: git.Commit) -> SyncResult:
        """Pulling into an empty repository: the branch starts at the fetched commit."""
        head = repo.create_head(
            branch_name, fetched, force=True,
            logmsg=f"Setting {branch_name} to {fetched.hexsha}",
        )
        repo.head.reference = head
        repo.head.reset(index=True, working_tree=True)
        logger.debug(f"Created {branch_name} at {fetched.hexsha}")
        return SyncResult("Doing a fast forward", MergeOutcome.FAST_FORWARD, fetched.hexsha)

    def _normal_merge(self, repo: git.Repo, local: git.Commit, fetched: git.Commit) -> SyncResult:
        if not repo.merge_base(local, fetched):
            raise GitOperationError("merge", fetched.hexsha, "No common ancestor")

        message = f"Merge: {fetched.hexsha} into {local.hexsha}"
        try:
            repo.git.merge("--no-ff", "--no-edit", "-m", message, fetched.hexsha)
        except git.exc.GitCommandError as e:
            if repo.index.unmerged_blobs():
                logger.info(f"Merge of {fetched.hexsha} left conflicts")
                return SyncResult(
                    "Merge has conflicts, resolve them in the working tree",
                    MergeOutcome.CONFLICTS,
                    local.hexsha,
                )
            raise translate_git_error("merge", fetched.hexsha, e) from e

        merged = repo.head.commit
        return SyncResult(
            f"Merged {fetched.hexsha[:8]} into {local.hexsha[:8]}",
            MergeOutcome.MERGED,
            merged.hexsha,
        )

    def fetch_all_refs(self, repo: git.Repo, remote_name: str) -> SyncResult:
        """Fetch and prune every branch and tag of the remote without merging."""
        remote = self._find_remote(repo, remote_name)
        with self._remote_operation(repo, remote, "fetch"):
            remote.fetch(prune=True, tags=True)
        return SyncResult("Fetching is done!")

    def push(self, repo: git.Repo, remote_name: str, ref_spec: str) -> SyncResult:
        """Push exactly one ref (``refs/heads/<b>`` or ``refs/tags/<t>``)."""
        try:
            repo.rev_parse(ref_spec)
        except (git.exc.BadName, ValueError):
            raise RefNotFoundError("push", ref_spec)

        remote = self._find_remote(repo, remote_name)
        with self._remote_operation(repo, remote, "push"):
            infos = remote.push(refspec=ref_spec)

        failures = [info for info in infos if info.flags & PUSH_FAILURE_FLAGS]
        if not infos or failures:
            summary = failures[0].summary.strip() if failures else "No ref was pushed"
            raise GitOperationError("push", ref_spec, summary)
        return SyncResult("Push is successful!")

    def checkout_branch(self, repo: git.Repo, branch_name: str) -> SyncResult:
        """Check out ``branch_name``, creating it at HEAD when it does not exist."""
        try:
            repo.git.check_ref_format("--branch", branch_name)
        except git.exc.GitCommandError:
            raise GitOperationError("checkout", branch_name, "Invalid branch name")

        if not repo.head.is_valid():
            logger.debug("Repository has no commits, creating the initial commit")
            repo.index.commit("Initial commit")

        head = self._find_head(repo, branch_name)
        if head is None:
            head = repo.create_head(branch_name, repo.head.commit)

        try:
            head.checkout()
        except git.exc.GitCommandError as e:
            raise translate_git_error("checkout", branch_name, e) from e
        return SyncResult("Checkout is successful!", commit=head.commit.hexsha)

    def create_tag(self, repo: git.Repo, tag_name: str) -> SyncResult:
        """Annotated tag at the tip of the active branch, replacing any old one."""
        head = self._find_head(repo, self.active_branch_name(repo))
        if head is None or not head.is_valid():
            raise RefNotFoundError("tag", tag_name, "Active branch cannot be resolved")

        target = head.commit
        try:
            repo.create_tag(tag_name, ref=target, message=f"Release {tag_name}", force=True)
        except git.exc.GitCommandError as e:
            raise translate_git_error("tag", tag_name, e) from e
        return SyncResult("Tag creation is successful!", commit=target.hexsha)

    def hard_reset(self, repo: git.Repo) -> SyncResult:
        """Reset index and working tree to HEAD, discarding local modifications."""
        if not repo.head.is_valid():
            raise RefNotFoundError("reset", "HEAD", "Repository has no commits")
        try:
            repo.head.reset(index=True, working_tree=True)
        except git.exc.GitCommandError as e:
            raise translate_git_error("reset", "HEAD", e) from e
        return SyncResult("Reset Successful!", commit=repo.head.commit.hexsha)
