"""Output formatting for sbsevery runs.

Everything goes to stderr; stdout is left free for the signer (which is
silenced anyway) and for callers piping sbsevery.
"""

import threading
from pathlib import Path

import typer

from sbsevery.models import RunReport


class Diagnostics:
    """Per-run diagnostic printer shared by the walker, dispatcher and workers.

    Progress lines are only printed in verbose mode. Worker errors are always
    printed.
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose
        self._lock = threading.Lock()

    def expanding(self, directory: Path) -> None:
        """Report a directory being expanded."""
        self._progress("expanding", str(directory))

    def pushing(self, file: Path) -> None:
        """Report a file handed to the dispatcher."""
        self._progress("pushing", str(file))

    def signing(self, file: Path) -> None:
        """Report a file about to be signed."""
        self._progress("signing", str(file))

    def skipped(self, message: str) -> None:
        """Report a filesystem node the walker could not use."""
        self._progress("error", message)

    def worker_error(self, message: str) -> None:
        """Report a worker that could not be launched, waited on or joined."""
        with self._lock:
            typer.secho(f"error:\t{message}", fg=typer.colors.RED, err=True)

    def _progress(self, label: str, text: str) -> None:
        if not self.verbose:
            return
        with self._lock:
            typer.secho(f"{label}:\t{text}", fg=typer.colors.BRIGHT_BLACK, err=True)


def print_summary(report: RunReport) -> None:
    """Print the final summary line to stderr.

    Args:
        report: Aggregate report of a finished run
    """
    color = typer.colors.GREEN if report.failures == 0 else typer.colors.RED
    typer.secho(
        f"ran {report.started} threads with {report.failures} failures",
        fg=color,
        bold=True,
        err=True,
    )


def print_failures(report: RunReport) -> None:
    """List every file whose signing attempt failed."""
    failed = report.failed_outcomes
    if not failed:
        return

    typer.secho("Failed:", fg=typer.colors.RED, err=True)
    for outcome in failed:
        if outcome.error is not None:
            reason = outcome.error
        else:
            reason = f"exit status {outcome.returncode}"
        typer.secho(f"  {_display_path(outcome.path)} ({reason})", err=True)


def _display_path(path: Path) -> str:
    """Format path for display, using ~ for home directory."""
    try:
        rel_path = path.relative_to(Path.home())
        return f"~/{rel_path}"
    except ValueError:
        return str(path)
