import logging
import sys
from dataclasses import replace
from pathlib import Path

import click
from click.core import ParameterSource
from dotenv import load_dotenv

from .collect import BenchmarkCollector
from .config import DEFAULT_LOG_LEVEL, BuddyConfig
from .diff import diff
from .errors import BenchBuddyError, RestoreFailure
from .models import DiffReport, NamingMode, ResultSet
from .motd import greeting
from .process import ProcessRunner
from .repo import GitRepository, RevisionWorkflow
from .report import render_report

logger = logging.getLogger(__name__)

SEPARATOR = "========================================="


def configure_logging(verbose: bool, log_level: str = DEFAULT_LOG_LEVEL) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else log_level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def run_comparison(
    repo_path: Path,
    config: BuddyConfig,
    *,
    workflow: RevisionWorkflow | None = None,
    collector: BenchmarkCollector | None = None,
) -> DiffReport:
    """Measure head and baseline, restore the workspace, and diff the results."""
    naming = NamingMode.FULL if config.full_names else NamingMode.SHORT
    runner = ProcessRunner()
    if collector is None:
        collector = BenchmarkCollector(
            runner, artifacts_dir=config.artifacts_dir, executable=config.dotnet_executable
        )
    if workflow is None:
        workflow = RevisionWorkflow(
            git_factory=lambda path: GitRepository(path, runner, config.git_executable)
        )

    def measure() -> ResultSet:
        results = collector.collect(repo_path, config.filter_expression, naming)
        click.echo()
        return results

    head_results, baseline_results = workflow.execute(repo_path, config.baseline, measure)
    logger.info(
        "Collected %d head and %d baseline benchmarks",
        len(head_results),
        len(baseline_results),
    )
    return diff(baseline_results, head_results, config.threshold_percent)


def _report_restore_failure(exc: RestoreFailure) -> None:
    click.echo(f"Error [{exc.error_code}]: {exc.message}", err=True)
    for step in exc.steps:
        status = "ok" if step.succeeded else "FAILED"
        detail = f": {step.detail}" if step.detail else ""
        click.echo(f"  [{status}] {step.name}{detail}", err=True)
    click.echo(f"Original revision: {exc.original_revision}", err=True)
    if exc.stash_ref:
        click.echo(f"Stashed changes:   {exc.stash_ref}", err=True)
    commands = exc.remediation()
    if commands:
        click.echo("Restore your workspace manually with:", err=True)
        for command in commands:
            click.echo(f"  {command}", err=True)


def _given(param_name: str) -> bool:
    source = click.get_current_context().get_parameter_source(param_name)
    return source is ParameterSource.COMMANDLINE


@click.command()
@click.option(
    "--path",
    "-p",
    "repo_path",
    default=".",
    show_default=True,
    type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path),
    help="Path to the git repository",
)
@click.option(
    "--baseline",
    "-b",
    default=None,
    help="Branch or commit to compare against [default: main]",
)
@click.option(
    "--threshold",
    "-t",
    default=None,
    type=click.FloatRange(min=0),
    help="Minimum absolute % difference to report [default: 1.0]",
)
@click.option(
    "--filter",
    "-f",
    "filter_expression",
    default=None,
    help="Which benchmarks to run; same as BenchmarkDotNet's --filter [default: *]",
)
@click.option(
    "--full-names/--short-names",
    default=False,
    help="Identify benchmarks by their full name, including namespace [default: short]",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(
    repo_path: Path,
    baseline: str | None,
    threshold: float | None,
    filter_expression: str | None,
    full_names: bool,
    verbose: bool,
) -> None:
    """Benchmark Buddy - compare BenchmarkDotNet results across git revisions."""
    load_dotenv()

    try:
        config = BuddyConfig.from_env()
    except RuntimeError as e:
        configure_logging(verbose)
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)
    configure_logging(verbose, config.log_level)

    overrides = {
        "baseline": baseline,
        "threshold_percent": threshold,
        "filter_expression": filter_expression,
        "full_names": full_names if _given("full_names") else None,
    }
    config = replace(
        config, **{key: value for key, value in overrides.items() if value is not None}
    )

    click.echo(greeting())
    click.echo()
    click.echo(f"Repository: {repo_path}")

    try:
        report = run_comparison(repo_path, config)
    except RestoreFailure as e:
        _report_restore_failure(e)
        sys.exit(1)
    except BenchBuddyError as e:
        click.echo(f"Error [{e.error_code}]: {e.message}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("Interrupted.", err=True)
        sys.exit(130)

    click.echo()
    click.echo(SEPARATOR)
    for line in render_report(report):
        click.echo(line)


if __name__ == "__main__":
    main()
