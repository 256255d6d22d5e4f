import shutil
from pathlib import Path

import pytest
from factories import git

_ENV_VARS = [
    "BENCH_BUDDY_BASELINE",
    "BENCH_BUDDY_THRESHOLD",
    "BENCH_BUDDY_FILTER",
    "BENCH_BUDDY_FULL_NAMES",
    "BENCH_BUDDY_GIT",
    "BENCH_BUDDY_DOTNET",
    "BENCH_BUDDY_ARTIFACTS_DIR",
    "BENCH_BUDDY_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """A repository on branch `feature`, one commit ahead of `main`."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.email", "bench@example.com")
    git(repo, "config", "user.name", "Bench Buddy")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "checkout", "-q", "-b", "main")
    (repo / "version.txt").write_text("baseline\n")
    git(repo, "add", "version.txt")
    git(repo, "commit", "-q", "-m", "baseline")
    git(repo, "checkout", "-q", "-b", "feature")
    (repo / "version.txt").write_text("head\n")
    git(repo, "commit", "-q", "-am", "head")
    return repo
