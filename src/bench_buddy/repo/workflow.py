"""Bracket two measurement passes around a revision switch.

The workspace is always put back the way it was found: once a stash or a
checkout has been attempted, the inverse action runs in a ``finally`` block and
every restoration sub-step is attempted even if an earlier one fails.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import click

from ..errors import (
    RESTORE_CHECKOUT,
    RESTORE_STASH_POP,
    BenchBuddyError,
    RestoreFailure,
    RestoreStep,
    StashFailure,
)
from ..models import ResultSet
from .git import GitRepository

logger = logging.getLogger(__name__)

STASH_MARKER_PREFIX = "bench-buddy"


class WorkflowPhase(str, Enum):
    NOT_STARTED = "not_started"
    MEASURED_HEAD = "measured_head"
    STASHED = "stashed"
    CHECKED_OUT_BASELINE = "checked_out_baseline"
    MEASURED_BASELINE = "measured_baseline"
    RESTORED = "restored"


@dataclass
class WorkflowState:
    original_revision: str | None = None
    had_changes: bool = False
    stash_ref: str | None = None
    checkout_attempted: bool = False
    phase: WorkflowPhase = WorkflowPhase.NOT_STARTED

    @property
    def stashed(self) -> bool:
        return self.stash_ref is not None


def _announce(message: str) -> None:
    click.echo(message)


class RevisionWorkflow:
    def __init__(
        self,
        git_factory: Callable[[Path], GitRepository] = GitRepository,
        announce: Callable[[str], None] = _announce,
    ) -> None:
        self._git_factory = git_factory
        self._announce = announce
        self.state = WorkflowState()

    def _enter(self, phase: WorkflowPhase) -> None:
        logger.info("Workflow phase: %s -> %s", self.state.phase.value, phase.value)
        self.state.phase = phase

    def execute(
        self,
        repo_path: str | Path,
        baseline_revision: str,
        measure: Callable[[], ResultSet],
    ) -> tuple[ResultSet, ResultSet]:
        """Measure the working tree, then ``baseline_revision``, then restore.

        Returns:
            ``(head_results, baseline_results)``.

        Raises:
            RevisionResolutionFailure: No current revision could be recorded.
            StashFailure, CheckoutFailure, ProcessFailure, ExportParseFailure:
                A step failed and the workspace was restored.
            RestoreFailure: The workspace could not be fully restored; chained
                from the failure that triggered the restoration, if any.
        """
        git = self._git_factory(Path(repo_path))
        self.state = state = WorkflowState()

        original = git.current_revision()
        state.original_revision = original
        self._announce(f"Current ref: `{original}`")

        head_results = measure()
        self._enter(WorkflowPhase.MEASURED_HEAD)

        primary: BaseException | None = None
        try:
            if git.has_changes():
                state.had_changes = True
                self._announce("Stashing working tree changes...")
                try:
                    state.stash_ref = git.stash_push(f"{STASH_MARKER_PREFIX}: {original}")
                except StashFailure as exc:
                    state.stash_ref = exc.stash_ref
                    raise
                if state.stashed:
                    self._enter(WorkflowPhase.STASHED)

            self._announce(f"Checking out baseline `{baseline_revision}`...")
            state.checkout_attempted = True
            git.checkout(baseline_revision)
            self._enter(WorkflowPhase.CHECKED_OUT_BASELINE)

            baseline_results = measure()
            self._enter(WorkflowPhase.MEASURED_BASELINE)
        except BaseException as exc:
            primary = exc
            raise
        finally:
            interrupted: list[BaseException] = []
            steps = self._restore(git, interrupted)
            if any(not step.succeeded for step in steps):
                cause = primary or (interrupted[0] if interrupted else None)
                raise RestoreFailure(original, state.stash_ref, steps, cause) from cause
            self._enter(WorkflowPhase.RESTORED)

        return head_results, baseline_results

    def _restore(
        self, git: GitRepository, interrupted: list[BaseException]
    ) -> list[RestoreStep]:
        """Undo the attempted steps; interrupts are collected, not propagated."""
        state = self.state
        steps: list[RestoreStep] = []

        if state.checkout_attempted and state.original_revision is not None:
            self._announce(f"Returning to {state.original_revision}...")
            steps.append(
                self._attempt(
                    RESTORE_CHECKOUT, git.checkout, state.original_revision, interrupted
                )
            )

        if state.stash_ref is not None:
            self._announce("Popping stash...")
            steps.append(
                self._attempt(RESTORE_STASH_POP, git.stash_pop, state.stash_ref, interrupted)
            )

        return steps

    @staticmethod
    def _attempt(
        name: str,
        action: Callable[[str], None],
        argument: str,
        interrupted: list[BaseException],
    ) -> RestoreStep:
        try:
            action(argument)
        except BenchBuddyError as exc:
            logger.error("Restoration step '%s' failed: %s", name, exc)
            return RestoreStep(name, False, exc.message)
        except BaseException as exc:
            # the remaining steps still run; the caller reports this as a RestoreFailure
            logger.error("Restoration step '%s' interrupted: %r", name, exc)
            interrupted.append(exc)
            return RestoreStep(name, False, f"interrupted ({type(exc).__name__})")
        logger.info("Restoration step '%s' succeeded", name)
        return RestoreStep(name, True)


__all__ = ["RevisionWorkflow", "WorkflowPhase", "WorkflowState", "STASH_MARKER_PREFIX"]
