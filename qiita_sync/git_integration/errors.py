"""Errors raised while asking git which documents changed."""

from qiita_sync.qiita_client.errors import SyncError


class GitRepositoryError(SyncError):
    """A git command needed for change selection failed.

    Attributes:
        repo_path: Directory the command ran in
        message: What was being attempted
        git_output: stderr from git, appended to the message when present
    """

    def __init__(self, repo_path: str, message: str, git_output: str = ""):
        full_message = f"Git repository error at {repo_path}: {message}"
        if git_output and git_output.strip():
            full_message += f" ({git_output.strip()})"
        super().__init__(full_message)
        self.repo_path = repo_path
        self.message = message
        self.git_output = git_output
