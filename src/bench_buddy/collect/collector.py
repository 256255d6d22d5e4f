import logging
import re
import shutil
from collections.abc import Callable
from pathlib import Path
from types import MappingProxyType

import click

from ..config import ARTIFACTS_DIR, BENCHMARK_PACKAGE, DOTNET_EXECUTABLE
from ..models import BenchmarkIdentity, BenchmarkMeasurement, NamingMode, ResultSet
from ..process import ProcessRunner
from .discovery import discover_benchmark_projects
from .export import parse_export_file

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

# the only directory collect() ever deletes, created inside the configured location
RUN_DIR_NAME = "bench-buddy-run"


def _reset_dir(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)


def build_run_args(filter_expression: str, artifacts_dir: Path) -> list[str]:
    return [
        "run",
        "-c",
        "Release",
        "--",
        "--filter",
        filter_expression,
        "--exporters",
        "json",
        "--artifacts",
        str(artifacts_dir),
    ]


class BenchmarkCollector:
    """Run every benchmark project under a root path and merge the results."""

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        artifacts_dir: str | Path = ARTIFACTS_DIR,
        executable: str = DOTNET_EXECUTABLE,
        announce: Callable[[str], None] = click.echo,
    ) -> None:
        self._runner = runner or ProcessRunner()
        self.artifacts_dir = Path(artifacts_dir)
        self.run_dir = self.artifacts_dir / RUN_DIR_NAME
        self._executable = executable
        self._announce = announce

    def _project_artifacts_dir(self, index: int, project_path: Path) -> Path:
        slug = _UNSAFE_CHARS.sub("_", project_path.stem) or "project"
        return self.run_dir / f"{index:03d}-{slug}"

    def collect(
        self,
        root_path: str | Path,
        filter_expression: str = "*",
        naming: NamingMode = NamingMode.SHORT,
    ) -> ResultSet:
        """Measure every discovered project; later duplicates overwrite earlier ones.

        Raises:
            ProcessFailure: The measurement tool failed for a project.
            ExportParseFailure: A produced export is malformed.
        """
        _reset_dir(self.run_dir)

        projects = discover_benchmark_projects(root_path, BENCHMARK_PACKAGE)
        if not projects:
            self._announce(f"No {BENCHMARK_PACKAGE} projects found.")
            return MappingProxyType({})

        results: dict[BenchmarkIdentity, BenchmarkMeasurement] = {}
        for index, project_path in enumerate(projects):
            self._announce(f"Running benchmark project {project_path.name}...")
            output_dir = self._project_artifacts_dir(index, project_path)
            _reset_dir(output_dir)

            self._runner.run(
                self._executable,
                build_run_args(filter_expression, output_dir),
                project_path.parent,
                stream_progress=True,
            )

            exports = sorted(output_dir.rglob("*.json"))
            if not exports:
                logger.warning("%s produced no JSON export", project_path)
            for export_path in exports:
                parsed = parse_export_file(export_path, naming)
                logger.debug("Parsed %d benchmarks from %s", len(parsed), export_path)
                results.update(parsed)

        return MappingProxyType(results)


__all__ = ["RUN_DIR_NAME", "BenchmarkCollector", "build_run_args"]
