import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from ..errors import ProcessFailure
from .progress import NullProgressSink, ProgressSink, select_progress_sink
from .runtime import close_process_streams, kill_process_tree, start_process

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    command: tuple[str, ...]
    stdout_lines: tuple[str, ...]
    exit_code: int
    stderr: str = ""

    @property
    def stdout(self) -> str:
        return "\n".join(self.stdout_lines)


class ProcessRunner:
    """Run one external command to completion and capture its output.

    Standard output is captured line by line (and optionally mirrored to a
    progress sink); standard error is buffered as one block. A non-zero exit
    code raises :class:`ProcessFailure`; stderr content alone never does.
    """

    def __init__(self, progress_factory: Callable[[], ProgressSink] | None = None) -> None:
        self._progress_factory = progress_factory or select_progress_sink

    def run(
        self,
        command: str,
        args: Sequence[str],
        working_dir: str | Path,
        stream_progress: bool = False,
    ) -> ProcessResult:
        argv = [command, *args]
        try:
            process = start_process(argv, str(working_dir))
        except OSError as exc:
            raise ProcessFailure(argv, None, str(exc)) from exc

        stderr_chunks: list[str] = []

        def _drain_stderr() -> None:
            if process.stderr is not None:
                stderr_chunks.append(process.stderr.read())

        stderr_reader = threading.Thread(target=_drain_stderr, daemon=True)
        stderr_reader.start()

        sink = self._progress_factory() if stream_progress else NullProgressSink()
        lines: list[str] = []
        try:
            if process.stdout is not None:
                for raw in process.stdout:
                    line = raw.rstrip("\r\n")
                    lines.append(line)
                    sink.update(line)
            exit_code = process.wait()
        except BaseException:
            logger.debug("Interrupted; killing process tree of pid %s", process.pid)
            kill_process_tree(process.pid)
            process.wait()
            raise
        finally:
            stderr_reader.join()
            close_process_streams(process)
            sink.finish()

        stderr = "".join(stderr_chunks)
        logger.debug("%s exited with code %s", " ".join(argv), exit_code)
        if exit_code != 0:
            raise ProcessFailure(argv, exit_code, stderr)
        return ProcessResult(
            command=tuple(argv),
            stdout_lines=tuple(lines),
            exit_code=exit_code,
            stderr=stderr,
        )


__all__ = ["ProcessResult", "ProcessRunner"]
