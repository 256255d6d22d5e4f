import logging
from pathlib import Path

from ..config import GIT_EXECUTABLE
from ..errors import (
    CheckoutFailure,
    ProcessFailure,
    RevisionResolutionFailure,
    StashFailure,
)
from ..process import ProcessResult, ProcessRunner

logger = logging.getLogger(__name__)


def _reason(exc: ProcessFailure) -> str:
    return exc.stderr.strip() or exc.message


class GitRepository:
    """The git operations the revision workflow needs, one process per call."""

    def __init__(
        self,
        repo_path: str | Path,
        runner: ProcessRunner | None = None,
        executable: str = GIT_EXECUTABLE,
    ) -> None:
        self.repo_path = Path(repo_path)
        self._runner = runner or ProcessRunner()
        self._executable = executable

    def _git(self, *args: str, stream_progress: bool = False) -> ProcessResult:
        return self._runner.run(
            self._executable, list(args), self.repo_path, stream_progress=stream_progress
        )

    def current_branch(self) -> str:
        """Return the symbolic name of HEAD.

        Raises:
            RevisionResolutionFailure: HEAD is detached or unresolvable.
        """
        try:
            name = self._git("rev-parse", "--abbrev-ref", "HEAD").stdout.strip()
        except ProcessFailure as exc:
            raise RevisionResolutionFailure(self.repo_path, _reason(exc)) from exc
        if not name or name == "HEAD":
            raise RevisionResolutionFailure(self.repo_path, "HEAD is detached")
        return name

    def current_commit(self) -> str:
        try:
            sha = self._git("rev-parse", "--verify", "HEAD").stdout.strip()
        except ProcessFailure as exc:
            raise RevisionResolutionFailure(self.repo_path, _reason(exc)) from exc
        if not sha:
            raise RevisionResolutionFailure(self.repo_path, "HEAD does not name a commit")
        return sha

    def current_revision(self) -> str:
        """Return the branch name, or the commit hash when HEAD is detached."""
        try:
            return self.current_branch()
        except RevisionResolutionFailure as exc:
            logger.info("No symbolic revision (%s); falling back to commit hash", exc.reason)
        return self.current_commit()

    def has_changes(self) -> bool:
        try:
            status = self._git("status", "--porcelain")
        except ProcessFailure as exc:
            raise StashFailure(f"cannot read working tree status: {_reason(exc)}") from exc
        return any(line.strip() for line in status.stdout_lines)

    def _stash_head(self) -> str | None:
        """Return the commit id of the newest stash entry, or None when there is none."""
        try:
            sha = self._git("rev-parse", "--verify", "--quiet", "refs/stash").stdout.strip()
        except ProcessFailure as exc:
            # --verify --quiet exits 1 without output when no stash exists
            if exc.exit_code == 1 and not exc.stderr.strip():
                return None
            raise StashFailure(f"cannot read the stash reference: {_reason(exc)}") from exc
        return sha or None

    def _created_stash(self, before: str | None) -> str | None:
        after = self._stash_head()
        if after is None or after == before:
            return None
        return after

    def stash_push(self, marker: str) -> str | None:
        """Stash all uncommitted changes, untracked files included.

        Returns:
            The commit id of the created stash entry, or None when git had
            nothing to stash.

        Raises:
            StashFailure: The push failed, or the created entry cannot be
                identified. ``stash_ref`` is set when a failing push still
                created an entry.
        """
        before = self._stash_head()
        try:
            self._git(
                "stash",
                "push",
                "--include-untracked",
                "--keep-index",
                "-m",
                marker,
                stream_progress=True,
            )
        except ProcessFailure as exc:
            try:
                created = self._created_stash(before)
            except StashFailure as lookup:
                logger.error("Cannot tell whether the failed push created a stash: %s", lookup)
                created = None
            raise StashFailure(_reason(exc), stash_ref=created) from exc

        try:
            return self._created_stash(before)
        except StashFailure as exc:
            raise StashFailure(
                f"{exc.reason}; the stashed changes are listed by `git stash list`"
            ) from exc

    def stash_pop(self, stash_sha: str) -> None:
        """Pop the stash entry whose commit id is ``stash_sha``."""
        try:
            listing = self._git("stash", "list", "--format=%H")
            for index, sha in enumerate(listing.stdout_lines):
                if sha.strip() == stash_sha:
                    self._git("stash", "pop", f"stash@{{{index}}}", stream_progress=True)
                    return
        except ProcessFailure as exc:
            raise StashFailure(_reason(exc)) from exc
        raise StashFailure(f"stash entry {stash_sha} is no longer in the stash list")

    def checkout(self, revision: str) -> None:
        try:
            self._git("checkout", revision, stream_progress=True)
        except ProcessFailure as exc:
            raise CheckoutFailure(revision, _reason(exc)) from exc


__all__ = ["GitRepository"]
