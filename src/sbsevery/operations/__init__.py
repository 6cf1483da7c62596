"""High-level operations for sbsevery."""

from sbsevery.operations.dispatch import dispatch
from sbsevery.operations.paths import normalize_cert_path
from sbsevery.operations.paths import normalize_key_path
from sbsevery.operations.run import sign_tree
from sbsevery.operations.sign import SigningWorker
from sbsevery.operations.sign import build_sign_command
from sbsevery.operations.sign import sign_file

__all__ = [
    "SigningWorker",
    "build_sign_command",
    "dispatch",
    "normalize_cert_path",
    "normalize_key_path",
    "sign_file",
    "sign_tree",
]
