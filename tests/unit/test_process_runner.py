import io
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from bench_buddy.errors import ProcessFailure
from bench_buddy.process import (
    ConsoleProgressSink,
    LineProgressSink,
    ProcessRunner,
    select_progress_sink,
)
from bench_buddy.process.runtime import kill_process_tree


class RecordingSink:
    def __init__(self) -> None:
        self.lines: list[str] = []
        self.finished = 0

    def update(self, line: str) -> None:
        self.lines.append(line)

    def finish(self) -> None:
        self.finished += 1


def _python(code: str) -> list[str]:
    return ["-c", code]


class TestProcessRunner:
    def test_captures_stdout_lines_in_order(self, tmp_path: Path) -> None:
        runner = ProcessRunner()
        result = runner.run(
            sys.executable, _python("print('one'); print('two'); print('three')"), tmp_path
        )
        assert result.stdout_lines == ("one", "two", "three")
        assert result.exit_code == 0
        assert result.stdout == "one\ntwo\nthree"

    def test_runs_in_working_directory(self, tmp_path: Path) -> None:
        code = "import os; print(os.getcwd())"
        result = ProcessRunner().run(sys.executable, _python(code), tmp_path)
        assert Path(result.stdout_lines[0]).resolve() == tmp_path.resolve()

    def test_stderr_on_success_is_not_a_failure(self, tmp_path: Path) -> None:
        result = ProcessRunner().run(
            sys.executable,
            _python("import sys; sys.stderr.write('warning: careful\\n'); print('ok')"),
            tmp_path,
        )
        assert result.stdout_lines == ("ok",)
        assert "warning: careful" in result.stderr

    def test_non_zero_exit_raises_with_stderr(self, tmp_path: Path) -> None:
        with pytest.raises(ProcessFailure) as exc_info:
            ProcessRunner().run(
                sys.executable,
                _python("import sys; sys.stderr.write('boom'); sys.exit(3)"),
                tmp_path,
            )
        failure = exc_info.value
        assert failure.exit_code == 3
        assert failure.stderr == "boom"
        assert failure.command[0] == sys.executable
        assert "exited with code 3: boom" in str(failure)

    def test_missing_executable_raises_process_failure(self, tmp_path: Path) -> None:
        with pytest.raises(ProcessFailure) as exc_info:
            ProcessRunner().run("bench-buddy-no-such-tool", [], tmp_path)
        assert exc_info.value.exit_code is None
        assert "could not be started" in str(exc_info.value)

    def test_large_stderr_does_not_deadlock(self, tmp_path: Path) -> None:
        code = "import sys\nsys.stderr.write('x' * 1_000_000)\nprint('done')"
        result = ProcessRunner().run(sys.executable, _python(code), tmp_path)
        assert result.stdout_lines == ("done",)
        assert len(result.stderr) == 1_000_000


class TestProgressStreaming:
    def test_lines_are_streamed_to_sink(self, tmp_path: Path) -> None:
        sink = RecordingSink()
        runner = ProcessRunner(progress_factory=lambda: sink)
        code = "print('a'); print('b')"
        runner.run(sys.executable, _python(code), tmp_path, stream_progress=True)
        assert sink.lines == ["a", "b"]
        assert sink.finished == 1

    def test_sink_not_used_without_streaming(self, tmp_path: Path) -> None:
        sink = RecordingSink()
        runner = ProcessRunner(progress_factory=lambda: sink)
        runner.run(sys.executable, _python("print('a')"), tmp_path)
        assert sink.lines == []
        assert sink.finished == 0

    def test_sink_finished_on_failure(self, tmp_path: Path) -> None:
        sink = RecordingSink()
        runner = ProcessRunner(progress_factory=lambda: sink)
        with pytest.raises(ProcessFailure):
            runner.run(
                sys.executable,
                _python("print('partial'); raise SystemExit(1)"),
                tmp_path,
                stream_progress=True,
            )
        assert sink.lines == ["partial"]
        assert sink.finished == 1

    def test_line_sink_appends(self, capsys: pytest.CaptureFixture[str]) -> None:
        sink = LineProgressSink()
        sink.update("Building...")
        sink.update("Running...")
        sink.finish()
        assert capsys.readouterr().out == "Building...\nRunning...\ndone!\n"


class TestInterruption:
    def test_interrupt_kills_process_and_propagates(self, tmp_path: Path) -> None:
        class InterruptingSink(RecordingSink):
            def update(self, line: str) -> None:
                super().update(line)
                raise KeyboardInterrupt

        sink = InterruptingSink()
        runner = ProcessRunner(progress_factory=lambda: sink)
        code = "import time\nprint('started', flush=True)\ntime.sleep(60)"

        with patch(
            "bench_buddy.process.runner.kill_process_tree", wraps=kill_process_tree
        ) as kill:
            with pytest.raises(KeyboardInterrupt):
                runner.run(sys.executable, _python(code), tmp_path, stream_progress=True)

        assert kill.call_count == 1
        assert sink.lines == ["started"]
        assert sink.finished == 1


class TestProgressSinks:
    def test_non_terminal_selects_line_sink(self) -> None:
        console = Console(file=io.StringIO())
        assert isinstance(select_progress_sink(console), LineProgressSink)

    def test_terminal_selects_console_sink(self) -> None:
        console = Console(file=io.StringIO(), force_terminal=True)
        assert isinstance(select_progress_sink(console), ConsoleProgressSink)

    def test_console_sink_ends_with_done_marker(self) -> None:
        buffer = io.StringIO()
        console = Console(file=buffer, force_terminal=True, width=40)
        sink = ConsoleProgressSink(console)

        sink.update("// Benchmark: Parser.Parse: DefaultJob " * 5)
        sink.update("Building...")
        sink.finish()

        assert buffer.getvalue().rstrip().endswith("done!")

    def test_console_sink_finish_without_output(self) -> None:
        buffer = io.StringIO()
        sink = ConsoleProgressSink(Console(file=buffer, force_terminal=True))
        sink.finish()
        assert "done!" in buffer.getvalue()
