__version__ = "0.1.0"

from .collect import BenchmarkCollector
from .config import BuddyConfig
from .diff import diff
from .models import (
    BenchmarkMeasurement,
    DiffRecord,
    DiffReport,
    NamingMode,
    ResultSet,
    SoloRecord,
)
from .process import ProcessRunner
from .repo import GitRepository, RevisionWorkflow
from .report import render_report

__all__ = [
    "__version__",
    "BenchmarkCollector",
    "BenchmarkMeasurement",
    "BuddyConfig",
    "DiffRecord",
    "DiffReport",
    "GitRepository",
    "NamingMode",
    "ProcessRunner",
    "ResultSet",
    "RevisionWorkflow",
    "SoloRecord",
    "diff",
    "render_report",
]
