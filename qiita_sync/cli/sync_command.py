"""Sync command orchestration for CLI.

This module provides the SyncCommand class that runs one sync: load the
access token, ask git which documents changed, then publish them one after
another. The first failure stops the run; documents already published stay
published and the failing document is left untouched.
"""

import logging
import os
from typing import Optional

from qiita_sync.cli.config import SyncSettings, load_settings
from qiita_sync.cli.errors import CLIError
from qiita_sync.cli.models import ExitCode, SyncSummary
from qiita_sync.cli.output import OutputHandler
from qiita_sync.file_mapper.errors import FileMapperError
from qiita_sync.git_integration.change_selector import ChangeSelector
from qiita_sync.git_integration.errors import GitRepositoryError
from qiita_sync.item_operations.models import ReconcileAction
from qiita_sync.item_operations.reconciler import Reconciler
from qiita_sync.qiita_client.api_wrapper import APIWrapper
from qiita_sync.qiita_client.auth import Authenticator
from qiita_sync.qiita_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    ItemNotFoundError,
)

logger = logging.getLogger(__name__)


class SyncCommand:
    """Orchestrates the complete sync workflow for the CLI.

    The sync workflow:
        1. Load the access token (missing token stops the run before git runs)
        2. Load sync settings and select changed documents via ChangeSelector
        3. Reconcile each document in order, stopping at the first failure
        4. Print a summary and return an exit code

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> exit_code = SyncCommand(output_handler=output).run()
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        repo_path: str = ".",
        settings: Optional[SyncSettings] = None,
        authenticator: Optional[Authenticator] = None,
        change_selector: Optional[ChangeSelector] = None,
        reconciler: Optional[Reconciler] = None,
        output_handler: Optional[OutputHandler] = None,
    ):
        """Initialize sync command with dependencies.

        Args:
            repo_path: Working directory inside the git repository
            settings: Sync settings (loaded from the environment if omitted)
            authenticator: Authenticator for the Qiita API (optional)
            change_selector: ChangeSelector for document discovery (optional)
            reconciler: Reconciler for publishing documents (optional)
            output_handler: OutputHandler for terminal output (optional)

        Note:
            Dependencies left as None are created in run(), after the access
            token has been validated.
        """
        self.repo_path = repo_path
        self.settings = settings
        self.authenticator = authenticator
        self.change_selector = change_selector
        self.reconciler = reconciler
        self.output_handler = output_handler or OutputHandler()
        self.summary = SyncSummary()
        self.failed_path: Optional[str] = None

    def run(self) -> ExitCode:
        """Execute the sync.

        Returns:
            ExitCode.SUCCESS when every selected document was published (or
            none were selected), otherwise the code for the first failure
        """
        self.summary = SyncSummary()
        self.failed_path = None

        try:
            # Step 1: Credentials
            if not self.authenticator:
                self.authenticator = Authenticator()
            credentials = self.authenticator.get_credentials()

            # Step 2: Settings and collaborators
            if self.settings is None:
                self.settings = load_settings()

            if not self.change_selector:
                self.change_selector = ChangeSelector(
                    repo_path=self.repo_path,
                    base_ref=self.settings.base_ref,
                    root_dir=self.settings.root_dir,
                    extension=self.settings.extension,
                )

            if not self.reconciler:
                self.reconciler = Reconciler(APIWrapper(credentials))

            # Step 3: Select documents
            logger.info(
                f"Selecting documents changed since {self.settings.base_ref} "
                f"under {self.settings.root_dir}"
            )
            changed_files = self.change_selector.select()

            if not changed_files:
                self.output_handler.print("No changed Markdown documents to sync.")
                return ExitCode.SUCCESS

            self.output_handler.info(f"Found {len(changed_files)} changed document(s)")

            # Step 4: Reconcile sequentially
            for file_path in changed_files:
                self._sync_file(file_path)

            self.output_handler.print_summary(
                created_count=len(self.summary.created),
                updated_count=len(self.summary.updated),
            )
            self.output_handler.success("Qiita sync finished")
            return ExitCode.SUCCESS

        except InvalidCredentialsError as e:
            self._report("Authentication failed", e)
            self.output_handler.info("Check the QIITA_TOKEN environment variable")
            return ExitCode.AUTH_ERROR

        except APIUnreachableError as e:
            self._report("API error", e)
            self.output_handler.info("Check your internet connection and try again")
            return ExitCode.NETWORK_ERROR

        except (APIAccessError, ItemNotFoundError) as e:
            self._report("API error", e)
            return ExitCode.API_ERROR

        except GitRepositoryError as e:
            self._report("Error fetching changed files", e)
            return ExitCode.GIT_ERROR

        except (FileMapperError, CLIError, ValueError) as e:
            self._report("Error", e)
            return ExitCode.GENERAL_ERROR

        except Exception as e:
            logger.exception("Unexpected error during sync")
            self.output_handler.error(f"Unexpected error: {e}")
            return ExitCode.GENERAL_ERROR

    def _sync_file(self, file_path: str) -> None:
        """Reconcile one document and record the result.

        Raises:
            Whatever the reconciler raises; failed_path is set first
        """
        display_path = os.path.relpath(file_path, os.path.abspath(self.repo_path))
        try:
            with self.output_handler.spinner(f"Publishing {display_path}..."):
                result = self.reconciler.reconcile(file_path)
        except Exception:
            self.failed_path = file_path
            raise

        self.summary.results.append(result)
        if result.action is ReconcileAction.CREATE:
            self.output_handler.success(f"Created: {display_path} (id: {result.item_id})")
        else:
            self.output_handler.success(f"Updated: {display_path} (id: {result.item_id})")

    def _report(self, prefix: str, error: Exception) -> None:
        """Log and display a fatal error, naming the document being processed."""
        if self.failed_path:
            message = f"{prefix} while processing {self.failed_path}: {error}"
        else:
            message = f"{prefix}: {error}"
        logger.error(message)
        self.output_handler.error(message)
