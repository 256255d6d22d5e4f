from .progress import (
    ConsoleProgressSink,
    LineProgressSink,
    NullProgressSink,
    ProgressSink,
    select_progress_sink,
)
from .runner import ProcessResult, ProcessRunner

__all__ = [
    "ConsoleProgressSink",
    "LineProgressSink",
    "NullProgressSink",
    "ProcessResult",
    "ProcessRunner",
    "ProgressSink",
    "select_progress_sink",
]
