from dataclasses import dataclass
from pathlib import Path


class BenchBuddyError(Exception):
    """Base class for every failure bench-buddy reports to the user."""

    error_code: str = "BENCH_BUDDY_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ProcessFailure(BenchBuddyError):
    """An external command exited non-zero (or could not be started)."""

    error_code = "PROCESS_FAILED"

    def __init__(self, command: list[str], exit_code: int | None, stderr: str) -> None:
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr
        details = stderr.strip()
        suffix = f": {details}" if details else ""
        if exit_code is None:
            summary = f"Process '{' '.join(self.command)}' could not be started{suffix}"
        else:
            summary = f"Process '{' '.join(self.command)}' exited with code {exit_code}{suffix}"
        super().__init__(summary)


class RevisionResolutionFailure(BenchBuddyError):
    """The repository has no resolvable current revision."""

    error_code = "REVISION_UNRESOLVED"

    def __init__(self, repo_path: str | Path, reason: str) -> None:
        self.repo_path = str(repo_path)
        self.reason = reason
        super().__init__(f"Cannot resolve the current revision of {self.repo_path}: {reason}")


class CheckoutFailure(BenchBuddyError):
    error_code = "CHECKOUT_FAILED"

    def __init__(self, revision: str, reason: str) -> None:
        self.revision = revision
        self.reason = reason
        super().__init__(f"Checkout of `{revision}` failed: {reason}")


class StashFailure(BenchBuddyError):
    error_code = "STASH_FAILED"

    def __init__(self, reason: str, stash_ref: str | None = None) -> None:
        self.reason = reason
        # set when the failing push still created an entry that must be popped
        self.stash_ref = stash_ref
        super().__init__(f"Stashing working tree changes failed: {reason}")


@dataclass(frozen=True)
class RestoreStep:
    """Outcome of one restoration sub-step."""

    name: str
    succeeded: bool
    detail: str = ""


class RestoreFailure(BenchBuddyError):
    """Workspace restoration did not fully succeed.

    Every sub-step is attempted; ``steps`` records which of them succeeded so the
    user can finish the recovery by hand.
    """

    error_code = "RESTORE_FAILED"

    def __init__(
        self,
        original_revision: str,
        stash_ref: str | None,
        steps: list[RestoreStep],
        primary: BaseException | None = None,
    ) -> None:
        self.original_revision = original_revision
        self.stash_ref = stash_ref
        self.steps = list(steps)
        self.primary = primary
        failed = ", ".join(step.name for step in self.steps if not step.succeeded)
        message = f"Workspace restoration failed ({failed})"
        if primary is not None:
            message += f" after an earlier error: {str(primary) or type(primary).__name__}"
        super().__init__(message)

    @property
    def failed_steps(self) -> list[RestoreStep]:
        return [step for step in self.steps if not step.succeeded]

    def remediation(self) -> list[str]:
        """Return the commands that finish the restoration manually."""
        commands = []
        for step in self.failed_steps:
            if step.name == RESTORE_CHECKOUT:
                commands.append(f"git checkout {self.original_revision}")
            elif step.name == RESTORE_STASH_POP and self.stash_ref:
                commands.append(f"git stash apply {self.stash_ref}")
        return commands


RESTORE_CHECKOUT = "return to original revision"
RESTORE_STASH_POP = "restore stashed changes"


class ExportParseFailure(BenchBuddyError):
    """A structured benchmark export could not be read."""

    error_code = "EXPORT_PARSE_FAILED"

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot parse benchmark export {self.path}: {reason}")


class DiscoveryWarning(UserWarning):
    """A project descriptor could not be read; the project is skipped."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to parse {self.path}: {reason}")
