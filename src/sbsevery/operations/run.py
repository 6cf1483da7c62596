"""Running a complete signing pass over a set of roots."""

from collections.abc import Sequence
from pathlib import Path

from sbsevery.channel import DEFAULT_CHANNEL_CAPACITY
from sbsevery.channel import PathChannel
from sbsevery.files import start_walker
from sbsevery.models import RunReport
from sbsevery.models import SigningConfig
from sbsevery.operations.dispatch import dispatch
from sbsevery.output import Diagnostics


def sign_tree(
    roots: Sequence[Path],
    config: SigningConfig,
    diagnostics: Diagnostics | None = None,
    channel_capacity: int = DEFAULT_CHANNEL_CAPACITY,
) -> RunReport:
    """Discover files under roots and sign each one.

    The walker runs on its own thread and hands paths over as they are found,
    so signing starts before discovery finishes. Returns once the walk is
    complete and every worker has been joined.

    Args:
        roots: Files or directories to sign, in order
        config: Signing settings
        diagnostics: Progress printer (quiet if omitted)
        channel_capacity: How many discovered paths may wait for dispatch

    Returns:
        RunReport for the whole run
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    channel = PathChannel(channel_capacity)
    walker = start_walker(roots, channel, diagnostics)
    try:
        report = dispatch(channel, config, diagnostics)
    finally:
        channel.close_receiver()
        walker.join()
    return report
