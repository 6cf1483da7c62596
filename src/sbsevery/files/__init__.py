"""Filesystem discovery for sbsevery."""

from sbsevery.files.discover import iter_files
from sbsevery.files.discover import start_walker
from sbsevery.files.discover import walk_roots

__all__ = [
    "iter_files",
    "start_walker",
    "walk_roots",
]
