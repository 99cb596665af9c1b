"""Git repository fixtures for testing.

These fixtures provide temporary git repositories for testing change
selection. They use real git operations to create realistic scenarios:
a baseline commit marked by a `base` branch, followed by commits that add
or modify documents.

Usage:
    from tests.fixtures.git_test_repos import docs_repo

    with docs_repo({"public/a.md": "# A\n"}) as repo_path:
        # public/a.md differs from branch `base`
        pass
"""

import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator, Optional

BASE_BRANCH = "base"


def _git(repo_path: Path, *args: str) -> subprocess.CompletedProcess:
    """Run a git command in repo_path, failing the test on error."""
    return subprocess.run(
        ["git", *args],
        cwd=repo_path,
        check=True,
        capture_output=True,
        text=True
    )


def write_files(repo_path: Path, files: Dict[str, str]) -> None:
    """Write files relative to repo_path, creating directories as needed."""
    for relative_path, content in files.items():
        file_path = repo_path / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")


def commit_all(repo_path: Path, message: str) -> None:
    """Stage everything and commit."""
    _git(repo_path, "add", "-A")
    _git(repo_path, "commit", "-m", message)


@contextmanager
def empty_git_repo() -> Generator[Path, None, None]:
    """Create a temporary empty git repository with a configured user.

    Yields:
        Path to the temporary git repository directory.
    """
    temp_dir = tempfile.mkdtemp(prefix="test_git_repo_")
    repo_path = Path(temp_dir).resolve()

    try:
        _git(repo_path, "init")
        _git(repo_path, "config", "user.name", "Test User")
        _git(repo_path, "config", "user.email", "test@example.com")
        _git(repo_path, "config", "commit.gpgsign", "false")
        yield repo_path
    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)


@contextmanager
def docs_repo(
    changed_files: Dict[str, str],
    baseline_files: Optional[Dict[str, str]] = None,
) -> Generator[Path, None, None]:
    """Create a repository whose HEAD differs from branch `base`.

    Args:
        changed_files: Files written and committed after the baseline
        baseline_files: Files committed in the baseline (defaults to a README)

    Yields:
        Path to the temporary git repository directory.

    Example:
        with docs_repo({"public/new.md": "# New\n"}) as repo_path:
            selector = ChangeSelector(str(repo_path), base_ref="base")
            assert selector.select() == [str(repo_path / "public/new.md")]
    """
    if baseline_files is None:
        baseline_files = {"README.md": "# Test Repository\n"}

    with empty_git_repo() as repo_path:
        write_files(repo_path, baseline_files)
        commit_all(repo_path, "Baseline")
        _git(repo_path, "branch", BASE_BRANCH)

        if changed_files:
            write_files(repo_path, changed_files)
            commit_all(repo_path, "Change documents")

        yield repo_path
