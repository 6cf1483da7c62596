"""Dispatching one signing worker per discovered file."""

from collections.abc import Iterable
from concurrent.futures import Future
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from sbsevery.exceptions import WorkerJoinError
from sbsevery.models import RunReport
from sbsevery.models import SignOutcome
from sbsevery.models import SigningConfig
from sbsevery.operations.sign import SigningWorker
from sbsevery.operations.sign import sign_file
from sbsevery.output import Diagnostics


class _UnstartedWorker:
    """Handle for a worker whose thread could not be started."""

    def __init__(self, path: Path, error: Exception) -> None:
        self._outcome = SignOutcome(path=path, returncode=None, error=str(error))

    def result(self) -> SignOutcome:
        return self._outcome


WorkerHandle = SigningWorker | Future[SignOutcome] | _UnstartedWorker


def dispatch(
    paths: Iterable[Path], config: SigningConfig, diagnostics: Diagnostics
) -> RunReport:
    """Sign every path concurrently and collect the outcomes.

    Args:
        paths: Discovered files, typically a PathChannel; consumed until it ends
        config: Signing settings shared by every worker
        diagnostics: Receives progress and worker errors

    Returns:
        RunReport counting every started worker and every failure. A failure is
        a non-zero exit, a signer that could not be launched, or a worker that
        could not be joined.

    A worker is started for each path as soon as it is received. With
    config.max_workers unset every file gets its own thread; otherwise files
    queue on a pool of that many threads.
    """
    if config.max_workers is None:
        return _collect(_start_threads(paths, config, diagnostics), diagnostics)

    with ThreadPoolExecutor(
        max_workers=config.max_workers, thread_name_prefix="sbsevery-sign"
    ) as pool:
        handles: list[tuple[Path, WorkerHandle]] = []
        for path in paths:
            try:
                handle: WorkerHandle = pool.submit(
                    sign_file, path, config, diagnostics
                )
            except RuntimeError as e:
                handle = _unstarted(path, e, diagnostics)
            handles.append((path, handle))
        return _collect(handles, diagnostics)


def _start_threads(
    paths: Iterable[Path], config: SigningConfig, diagnostics: Diagnostics
) -> list[tuple[Path, WorkerHandle]]:
    handles: list[tuple[Path, WorkerHandle]] = []
    for path in paths:
        worker = SigningWorker(path, config, diagnostics)
        try:
            worker.start()
        except RuntimeError as e:
            handles.append((path, _unstarted(path, e, diagnostics)))
            continue
        handles.append((path, worker))
    return handles


def _unstarted(
    path: Path, error: RuntimeError, diagnostics: Diagnostics
) -> _UnstartedWorker:
    # Thread exhaustion fails this file only; dispatch keeps receiving.
    diagnostics.worker_error(f"{path}: could not start worker: {error}")
    return _UnstartedWorker(path, error)


def _collect(
    handles: list[tuple[Path, WorkerHandle]], diagnostics: Diagnostics
) -> RunReport:
    report = RunReport(started=len(handles))
    for path, handle in handles:
        try:
            outcome = _join(path, handle)
        except WorkerJoinError as e:
            diagnostics.worker_error(str(e))
            report.record_join_failure()
            continue
        report.record(outcome)
    return report


def _join(path: Path, handle: WorkerHandle) -> SignOutcome:
    try:
        return handle.result()
    except WorkerJoinError:
        raise
    except Exception as e:
        raise WorkerJoinError(path, e) from e
