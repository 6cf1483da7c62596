"""Path normalization and validation utilities."""

from pathlib import Path

from sbsevery.exceptions import InvalidKeyMaterialError


def normalize_key_path(key: Path) -> Path:
    """Normalize and validate the private key path.

    Args:
        key: Path to the signing key

    Returns:
        Absolute path to the key

    Raises:
        InvalidKeyMaterialError: If key does not exist or is not a file
    """
    return _normalize_key_material("Key", key)


def normalize_cert_path(cert: Path) -> Path:
    """Normalize and validate the certificate path.

    Args:
        cert: Path to the signing certificate

    Returns:
        Absolute path to the certificate

    Raises:
        InvalidKeyMaterialError: If cert does not exist or is not a file
    """
    return _normalize_key_material("Certificate", cert)


def _normalize_key_material(kind: str, path: Path) -> Path:
    path = path.expanduser().resolve()

    if not path.exists():
        raise InvalidKeyMaterialError(kind, path, "does not exist")
    if not path.is_file():
        raise InvalidKeyMaterialError(kind, path, "is not a file")

    return path
