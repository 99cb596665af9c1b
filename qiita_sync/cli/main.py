"""Main CLI entry point for qiita-sync command.

This module provides the Typer application that serves as the entry point
for the qiita-sync command-line tool. What gets published is decided by the
git working tree and the environment; the options only control output.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from qiita_sync.cli.models import ExitCode
from qiita_sync.cli.output import OutputHandler
from qiita_sync.cli.sync_command import SyncCommand

__version__ = "0.1.0"

app = typer.Typer(
    name="qiita-sync",
    help="""Publish changed Markdown documents to Qiita.

Documents under QIITA_SYNC_ROOT (default: public) that differ from
QIITA_SYNC_BASE_REF (default: origin/main) are created or updated on Qiita,
and the returned id/created_at/updated_at are written back to their frontmatter.

Requires QIITA_TOKEN in the environment or a .env file.""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Attach handlers to the 'qiita_sync' logger.

    The root logger is left alone so requests and urllib3 stay quiet.

    Args:
        verbosity: 0 for warnings, 1 for info, 2 or more for debug
        logdir: Directory for a timestamped log file (optional)
    """
    level = _LOG_LEVELS.get(verbosity, logging.DEBUG)

    app_logger = logging.getLogger("qiita_sync")
    app_logger.setLevel(level)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-8s %(message)s", datefmt=_DATE_FORMAT)
    )
    app_logger.addHandler(stderr_handler)

    if not logdir:
        return

    log_dir = Path(logdir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"qiita-sync_{datetime.now():%Y%m%d_%H%M%S}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s", datefmt=_DATE_FORMAT)
    )
    app_logger.addHandler(file_handler)

    logger.info(f"Writing log to {log_file}")


@app.command()
def main_command(
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Publish changed Markdown documents to Qiita.

    \b
    ENVIRONMENT:
      QIITA_TOKEN            Qiita access token (required)
      QIITA_API_URL          API base URL (default: https://qiita.com/api/v2)
      QIITA_SYNC_BASE_REF    Revision to diff against (default: origin/main)
      QIITA_SYNC_ROOT        Directory with documents (default: public)
      QIITA_SYNC_EXTENSION   Document extension (default: .md)
    """
    if version:
        typer.echo(f"qiita-sync version {__version__}")
        raise typer.Exit()

    _configure_logging(verbosity, logdir)

    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    exit_code = SyncCommand(output_handler=output).run()

    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    Errors escaping the Typer app are reported and mapped to a non-zero
    exit code.
    """
    try:
        app()
    except Exception as e:
        logger.exception("Uncaught exception")
        print(f"Uncaught exception: {e}", file=sys.stderr)
        sys.exit(ExitCode.GENERAL_ERROR)


# Allow running as: python -m qiita_sync.cli.main
if __name__ == "__main__":
    main()
