from typing import Protocol

import click
from rich.console import Console
from rich.status import Status
from rich.text import Text


class ProgressSink(Protocol):
    """Receives the live output of a running external process."""

    def update(self, line: str) -> None: ...

    def finish(self) -> None: ...


class NullProgressSink:
    def update(self, line: str) -> None:
        pass

    def finish(self) -> None:
        pass


class LineProgressSink:
    """Non-interactive backend: every line is appended to the output."""

    def __init__(self, err: bool = False) -> None:
        self._err = err

    def update(self, line: str) -> None:
        click.echo(line, err=self._err)

    def finish(self) -> None:
        click.echo("done!", err=self._err)


class ConsoleProgressSink:
    """Terminal backend: a single status line overwritten by each new line.

    Output stays bounded no matter how chatty the tool is; ``finish`` replaces the
    status line with a static ``done!`` marker.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()
        self._status: Status | None = None

    def _render(self, line: str) -> Text:
        width = max(self._console.width - 4, 10)
        return Text(line[:width], no_wrap=True, overflow="ellipsis")

    def update(self, line: str) -> None:
        if self._status is None:
            self._status = self._console.status(self._render(line))
            self._status.start()
        else:
            self._status.update(self._render(line))

    def finish(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None
        self._console.print("done!", highlight=False)


def select_progress_sink(console: Console | None = None) -> ProgressSink:
    console = console or Console()
    if console.is_terminal:
        return ConsoleProgressSink(console)
    return LineProgressSink()


__all__ = [
    "ConsoleProgressSink",
    "LineProgressSink",
    "NullProgressSink",
    "ProgressSink",
    "select_progress_sink",
]
