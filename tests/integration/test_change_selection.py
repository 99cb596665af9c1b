"""Integration tests for ChangeSelector against real git repositories."""

import os
import subprocess
import sys

import pytest

from qiita_sync.git_integration.change_selector import ChangeSelector
from qiita_sync.git_integration.errors import GitRepositoryError
from tests.fixtures.git_test_repos import (
    BASE_BRANCH,
    commit_all,
    docs_repo,
    empty_git_repo,
    write_files,
)

pytestmark = pytest.mark.integration


class TestChangeSelection:
    """ChangeSelector.select() on real repositories."""

    def test_added_and_modified_documents(self):
        baseline = {
            "README.md": "# Repo\n",
            "public/old.md": "---\ntitle: Old\n---\nOld\n",
            "public/same.md": "---\ntitle: Same\n---\nSame\n",
        }
        changed = {
            "public/old.md": "---\ntitle: Old\n---\nEdited\n",
            "public/new.md": "---\ntitle: New\n---\nNew\n",
        }

        with docs_repo(changed, baseline) as repo_path:
            selected = ChangeSelector(str(repo_path), base_ref=BASE_BRANCH).select()

        assert selected == [
            str(repo_path / "public" / "new.md"),
            str(repo_path / "public" / "old.md"),
        ]

    def test_ignores_files_outside_root_and_other_extensions(self):
        changed = {
            "drafts/wip.md": "# WIP\n",
            "README.md": "# Changed readme\n",
            "public/image.png": "not really a png",
            "public/notes.txt": "notes",
            "public/post.md": "# Post\n",
        }

        with docs_repo(changed) as repo_path:
            selected = ChangeSelector(str(repo_path), base_ref=BASE_BRANCH).select()

        assert selected == [str(repo_path / "public" / "post.md")]

    def test_deleted_documents_are_skipped(self):
        baseline = {"public/gone.md": "# Gone\n", "public/kept.md": "# Kept\n"}

        with docs_repo({}, baseline) as repo_path:
            (repo_path / "public" / "gone.md").unlink()
            write_files(repo_path, {"public/kept.md": "# Kept, edited\n"})
            commit_all(repo_path, "Delete one, edit one")

            selected = ChangeSelector(str(repo_path), base_ref=BASE_BRANCH).select()

        assert selected == [str(repo_path / "public" / "kept.md")]

    def test_uncommitted_changes_are_included(self):
        with docs_repo({}, {"public/a.md": "# A\n"}) as repo_path:
            write_files(repo_path, {"public/a.md": "# A, not yet committed\n"})

            selected = ChangeSelector(str(repo_path), base_ref=BASE_BRANCH).select()

        assert selected == [str(repo_path / "public" / "a.md")]

    def test_non_ascii_and_nested_paths(self):
        changed = {
            "public/日本語/記事.md": "# 記事\n",
            "public/2024/01/post.md": "# Post\n",
        }

        with docs_repo(changed) as repo_path:
            selected = ChangeSelector(str(repo_path), base_ref=BASE_BRANCH).select()

        assert sorted(selected) == sorted([
            str(repo_path / "public" / "2024" / "01" / "post.md"),
            str(repo_path / "public" / "日本語" / "記事.md"),
        ])

    @pytest.mark.skipif(sys.platform == "win32", reason="names not allowed on Windows")
    def test_names_git_would_quote(self):
        """Quotes, tabs and backslashes in file names resolve to real paths."""
        names = ['public/say "hi".md', "public/tab\tname.md", "public/back\\slash.md"]

        with docs_repo({name: "# Doc\n" for name in names}) as repo_path:
            selected = ChangeSelector(str(repo_path), base_ref=BASE_BRANCH).select()

            assert sorted(selected) == sorted(str(repo_path / name) for name in names)
            assert all(os.path.exists(path) for path in selected)

    def test_subdirectory_working_directory(self):
        """Paths resolve against the repository root, not the working directory."""
        with docs_repo({"public/post.md": "# Post\n"}) as repo_path:
            selected = ChangeSelector(
                str(repo_path / "public"), base_ref=BASE_BRANCH, root_dir="."
            ).select()

        assert selected == [str(repo_path / "public" / "post.md")]

    def test_no_changes(self):
        with docs_repo({}) as repo_path:
            assert ChangeSelector(str(repo_path), base_ref=BASE_BRANCH).select() == []

    def test_custom_extension(self):
        changed = {"public/a.md": "# A\n", "public/b.markdown": "# B\n"}

        with docs_repo(changed) as repo_path:
            selected = ChangeSelector(
                str(repo_path), base_ref=BASE_BRANCH, extension=".markdown"
            ).select()

        assert selected == [str(repo_path / "public" / "b.markdown")]


class TestChangeSelectionErrors:
    """Git failures surface as GitRepositoryError."""

    def test_unknown_base_ref(self):
        with docs_repo({"public/a.md": "# A\n"}) as repo_path:
            with pytest.raises(GitRepositoryError) as exc_info:
                ChangeSelector(str(repo_path), base_ref="origin/does-not-exist").select()

        assert exc_info.value.git_output

    def test_not_a_repository(self, tmp_path):
        with pytest.raises(GitRepositoryError):
            ChangeSelector(str(tmp_path)).select()

    def test_repository_without_commits(self):
        with empty_git_repo() as repo_path:
            with pytest.raises(GitRepositoryError):
                ChangeSelector(str(repo_path), base_ref="main").select()

    def test_repository_is_not_modified(self):
        with docs_repo({"public/a.md": "# A\n"}) as repo_path:
            before = subprocess.run(
                ["git", "status", "--porcelain"], cwd=repo_path,
                capture_output=True, text=True, check=True,
            ).stdout

            ChangeSelector(str(repo_path), base_ref=BASE_BRANCH).select()

            after = subprocess.run(
                ["git", "status", "--porcelain"], cwd=repo_path,
                capture_output=True, text=True, check=True,
            ).stdout

        assert before == after == ""
