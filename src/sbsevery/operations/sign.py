"""Signing a single file with the external signer."""

import subprocess
import threading
from pathlib import Path

from sbsevery.exceptions import WorkerJoinError
from sbsevery.models import SignOutcome
from sbsevery.models import SigningConfig
from sbsevery.output import Diagnostics


def build_sign_command(file: Path, config: SigningConfig) -> list[str]:
    """Build the signer argv that signs file in place."""
    return [
        config.signer,
        "--key",
        str(config.key),
        "--cert",
        str(config.cert),
        "--output",
        str(file),
        str(file),
    ]


def sign_file(
    file: Path, config: SigningConfig, diagnostics: Diagnostics
) -> SignOutcome:
    """Run the signer once on file and wait for it to exit.

    Args:
        file: File to sign in place
        config: Key, certificate and signer to use
        diagnostics: Receives the progress line and launch errors

    Returns:
        SignOutcome with the exit status, or with error set if the signer
        could not be started or waited on. The signer's output is discarded.
    """
    diagnostics.signing(file)
    try:
        completed = subprocess.run(
            build_sign_command(file, config),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        diagnostics.worker_error(f"{file}: {e}")
        return SignOutcome(path=file, returncode=None, error=str(e))

    return SignOutcome(path=file, returncode=completed.returncode)


class SigningWorker(threading.Thread):
    """Thread that signs one file.

    Call result() exactly once to join the thread and get its outcome.
    """

    def __init__(
        self, file: Path, config: SigningConfig, diagnostics: Diagnostics
    ) -> None:
        super().__init__(name=f"sbsevery-sign:{file.name}", daemon=True)
        self.file = file
        self._config = config
        self._diagnostics = diagnostics
        self._outcome: SignOutcome | None = None
        self._exception: BaseException | None = None

    def run(self) -> None:
        try:
            self._outcome = sign_file(self.file, self._config, self._diagnostics)
        except Exception as e:
            self._exception = e

    def result(self) -> SignOutcome:
        """Wait for the thread to finish and return its outcome.

        Raises:
            WorkerJoinError: If the thread ended without an outcome
        """
        self.join()
        if self._outcome is None:
            cause = self._exception or RuntimeError("worker produced no outcome")
            raise WorkerJoinError(self.file, cause)
        return self._outcome
