import logging
import subprocess  # nosec B404 - fixed executables, arguments passed as a list

import psutil

logger = logging.getLogger(__name__)


def start_process(command: list[str], working_dir: str) -> subprocess.Popen[str]:
    logger.debug("Starting process in %s: %s", working_dir, " ".join(command))
    return subprocess.Popen(  # nosec B603 - trusted command
        command,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=working_dir,
        text=True,
        encoding="utf-8",
        errors="replace",
        bufsize=1,
    )


def kill_process_tree(pid: int) -> None:
    try:
        parent = psutil.Process(pid)
    except psutil.Error:
        return

    for child in parent.children(recursive=True):
        try:
            child.kill()
        except psutil.Error:
            pass
    try:
        parent.kill()
    except psutil.Error:
        pass


def close_process_streams(process: subprocess.Popen[str]) -> None:
    for stream in (process.stdin, process.stdout, process.stderr):
        try:
            if stream:
                stream.close()
        except OSError:  # nosec B110 - best-effort cleanup
            pass


__all__ = [
    "close_process_streams",
    "kill_process_tree",
    "start_process",
]
