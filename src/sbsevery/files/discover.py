"""File discovery for signing runs."""

import stat
import threading
from collections.abc import Iterable
from collections.abc import Iterator
from pathlib import Path

from sbsevery.channel import PathChannel
from sbsevery.exceptions import ChannelClosedError
from sbsevery.output import Diagnostics


def iter_files(roots: Iterable[Path], diagnostics: Diagnostics) -> Iterator[Path]:
    """Yield every regular file reachable from roots.

    Args:
        roots: Files or directories to expand, in order
        diagnostics: Receives expansion progress and skipped nodes

    Yields:
        Absolute paths to regular files, depth-first, in directory listing
        order. Overlapping roots yield the same file more than once.

    Roots are resolved first, so a symlinked root is followed. Inside a tree,
    symlinks (to files or directories) and special files are skipped, which
    also means symlink cycles are never entered. Nodes that cannot be read
    are reported and skipped.
    """
    for root in roots:
        try:
            resolved = Path(root).resolve(strict=True)
        except (OSError, RuntimeError) as e:
            diagnostics.skipped(f"{root}: {e}")
            continue

        if resolved.is_dir():
            yield from _walk_directory(resolved, diagnostics)
        elif _is_regular_file(resolved, diagnostics):
            yield resolved
        else:
            diagnostics.skipped(f"{root}: not a regular file or directory")


def walk_roots(
    roots: Iterable[Path], channel: PathChannel, diagnostics: Diagnostics
) -> None:
    """Push every discovered file into channel, then close it.

    Stops quietly if the receiving end goes away. Any other error ends the
    walk early; it is reported before being re-raised.
    """
    try:
        for path in iter_files(roots, diagnostics):
            diagnostics.pushing(path)
            channel.send(path)
    except ChannelClosedError:
        return
    except Exception as e:
        diagnostics.worker_error(f"walk stopped early: {e}")
        raise
    finally:
        channel.close()


def start_walker(
    roots: Iterable[Path], channel: PathChannel, diagnostics: Diagnostics
) -> threading.Thread:
    """Run walk_roots on its own thread and return the started thread."""
    walker = threading.Thread(
        target=walk_roots,
        args=(list(roots), channel, diagnostics),
        name="sbsevery-walker",
        daemon=True,
    )
    walker.start()
    return walker


def _walk_directory(directory: Path, diagnostics: Diagnostics) -> Iterator[Path]:
    def on_error(error: OSError) -> None:
        diagnostics.skipped(str(error))

    for dirpath, _dirnames, filenames in directory.walk(
        on_error=on_error, follow_symlinks=False
    ):
        diagnostics.expanding(dirpath)
        for filename in filenames:
            path = dirpath / filename
            if _is_regular_file(path, diagnostics):
                yield path


def _is_regular_file(path: Path, diagnostics: Diagnostics) -> bool:
    try:
        mode = path.lstat().st_mode
    except OSError as e:
        diagnostics.skipped(str(e))
        return False
    return stat.S_ISREG(mode)
