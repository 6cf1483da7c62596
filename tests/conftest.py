"""Shared fixtures for sbsevery tests."""

import shutil

import pytest

from sbsevery.models import SigningConfig


@pytest.fixture
def key_material(tmp_path):
    """Create a throwaway key and certificate."""
    keys = tmp_path / "keys"
    keys.mkdir()
    key = keys / "DB.key"
    cert = keys / "DB.crt"
    key.write_text("key")
    cert.write_text("cert")
    return key, cert


@pytest.fixture
def make_config(key_material):
    """Build a SigningConfig around a stand-in signer executable."""

    def _make(signer: str = "true", max_workers: int | None = None):
        if shutil.which(signer) is None and "missing" not in signer:
            pytest.skip(f"{signer} not available")
        key, cert = key_material
        return SigningConfig(key=key, cert=cert, signer=signer, max_workers=max_workers)

    return _make
