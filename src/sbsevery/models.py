"""Data models for sbsevery."""

from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

DEFAULT_SIGNER = "sbsign"


@dataclass(frozen=True)
class SigningConfig:
    """Immutable signing settings shared by every worker in a run."""

    key: Path  # Private key (absolute)
    cert: Path  # Certificate (absolute)
    signer: str = DEFAULT_SIGNER  # Executable looked up on PATH
    max_workers: int | None = None  # None means one thread per file


@dataclass(frozen=True)
class SignOutcome:
    """Terminal result of one signing attempt."""

    path: Path
    returncode: int | None  # None when the signer could not be run or waited on
    error: str | None = None

    @property
    def success(self) -> bool:
        """True if the signer ran and exited with status zero."""
        return self.error is None and self.returncode == 0


@dataclass
class RunReport:
    """Aggregate result of a signing run."""

    started: int = 0
    failures: int = 0
    outcomes: list[SignOutcome] = field(default_factory=list)

    def record(self, outcome: SignOutcome) -> None:
        """Add a joined outcome to the report."""
        self.outcomes.append(outcome)
        if not outcome.success:
            self.failures += 1

    def record_join_failure(self) -> None:
        """Count a worker that terminated without producing an outcome."""
        self.failures += 1

    @property
    def failed_outcomes(self) -> list[SignOutcome]:
        """Outcomes that did not succeed, in join order."""
        return [o for o in self.outcomes if not o.success]
