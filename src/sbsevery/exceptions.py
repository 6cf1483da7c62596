"""Custom exceptions for sbsevery."""

from pathlib import Path


class SbseveryError(Exception):
    """Base exception for sbsevery."""


class InvalidKeyMaterialError(SbseveryError):
    """Key or certificate path is missing or not a regular file."""

    def __init__(self, kind: str, path: Path, reason: str):
        self.kind = kind
        self.path = path
        super().__init__(f"{kind} {reason}: {path}")


class ChannelClosedError(SbseveryError):
    """Send attempted on a channel whose receiver has gone away."""


class WorkerJoinError(SbseveryError):
    """A worker terminated without producing an outcome."""

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"worker for {path} failed: {cause!r}")
