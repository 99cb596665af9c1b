"""Change selection for documents that differ from the upstream branch.

This module provides the ChangeSelector class which asks git which files
under the managed root directory changed relative to a reference revision
(origin/main by default) and returns the Markdown documents among them.
It uses subprocess to execute git commands and never modifies the repository.
"""

import logging
import os
import subprocess
from typing import List

from qiita_sync.git_integration.errors import GitRepositoryError

logger = logging.getLogger(__name__)

# Git command timeout in seconds
GIT_TIMEOUT = 10


class ChangeSelector:
    """Lists changed documents under a root directory.

    Paths reported by git are relative to the repository top level; they
    are resolved to absolute paths, filtered by extension and deduplicated
    while keeping git's order.

    Example:
        >>> selector = ChangeSelector(".", base_ref="origin/main", root_dir="public")
        >>> for path in selector.select():
        ...     print(path)
    """

    def __init__(
        self,
        repo_path: str = ".",
        base_ref: str = "origin/main",
        root_dir: str = "public",
        extension: str = ".md",
    ):
        """Initialize the change selector.

        Args:
            repo_path: Any directory inside the git working tree
            base_ref: Revision to diff against (e.g., origin/main)
            root_dir: Managed directory, relative to repo_path
            extension: Managed document extension (e.g., .md)
        """
        self.repo_path = os.path.abspath(repo_path)
        self.base_ref = base_ref
        self.root_dir = root_dir
        self.extension = extension

    def _run_git(self, args: List[str], description: str) -> str:
        """Run a git command in repo_path and return its stdout.

        Raises:
            GitRepositoryError: If git is missing, times out or exits non-zero
        """
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=GIT_TIMEOUT,
            )
        except subprocess.TimeoutExpired:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=f"{description} timed out after {GIT_TIMEOUT} seconds",
            )
        except FileNotFoundError:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message="Git command not found. Please install git.",
            )

        if result.returncode != 0:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=f"{description} failed",
                git_output=result.stderr,
            )

        return result.stdout

    def _get_toplevel(self) -> str:
        """Return the absolute path of the repository's working tree root."""
        output = self._run_git(
            ["rev-parse", "--show-toplevel"],
            "Locating repository root",
        )
        return output.rstrip("\n")

    def select(self) -> List[str]:
        """Return absolute paths of changed documents, in git's order.

        Deleted files are excluded since they can't be published.

        Returns:
            List of absolute paths (may be empty)

        Raises:
            GitRepositoryError: If the diff can't be computed (unknown ref,
                not a repository, git missing)
        """
        toplevel = self._get_toplevel()

        output = self._run_git(
            [
                "diff",
                "-z",
                "--name-only",
                "--diff-filter=d",
                self.base_ref,
                "--",
                self.root_dir,
            ],
            f"Diff against {self.base_ref}",
        )

        seen = set()
        changed: List[str] = []
        # -z output is NUL-separated and never quoted
        for relative in output.split("\0"):
            if not relative or not relative.endswith(self.extension):
                continue

            full_path = os.path.normpath(os.path.join(toplevel, relative))
            if full_path in seen:
                continue
            seen.add(full_path)
            changed.append(full_path)

        logger.info(
            f"Found {len(changed)} changed document(s) under {self.root_dir} "
            f"relative to {self.base_ref}"
        )
        return changed
