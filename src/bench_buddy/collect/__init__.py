from .collector import BenchmarkCollector, build_run_args
from .discovery import discover_benchmark_projects, references_package
from .export import ExportRecord, parse_export, parse_export_file

__all__ = [
    "BenchmarkCollector",
    "ExportRecord",
    "build_run_args",
    "discover_benchmark_projects",
    "parse_export",
    "parse_export_file",
    "references_package",
]
