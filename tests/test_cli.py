"""Tests for the command-line interface."""

import shutil

import pytest
from typer.testing import CliRunner

from sbsevery import __version__
from sbsevery.cli import app

runner = CliRunner()

needs_true_false = pytest.mark.skipif(
    shutil.which("true") is None or shutil.which("false") is None,
    reason="requires true and false executables",
)


@pytest.fixture
def efi_tree(tmp_path):
    root = tmp_path / "efi"
    (root / "EFI" / "Boot").mkdir(parents=True)
    (root / "vmlinuz").touch()
    (root / "EFI" / "Boot" / "bootx64.efi").touch()
    return root


def key_args(key_material):
    key, cert = key_material
    return ["-k", str(key), "-c", str(cert)]


class TestCli:
    """Tests for the sbsevery command."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"sbsevery {__version__}" in result.output

    def test_missing_key_option_is_usage_error(self, efi_tree):
        """Test that key and certificate are required."""
        result = runner.invoke(app, [str(efi_tree)])

        assert result.exit_code == 2

    def test_nonexistent_key(self, efi_tree, key_material, tmp_path):
        """Test that a bad key path fails before anything is signed."""
        _, cert = key_material

        result = runner.invoke(
            app,
            [str(efi_tree), "-k", str(tmp_path / "nope.key"), "-c", str(cert)],
        )

        assert result.exit_code == 1
        assert "Key does not exist" in result.output
        assert "ran " not in result.output

    @needs_true_false
    def test_reports_summary(self, efi_tree, key_material):
        """Test that a successful run prints the summary line."""
        result = runner.invoke(
            app, [str(efi_tree), *key_args(key_material), "--signer", "true"]
        )

        assert result.exit_code == 0
        assert "ran 2 threads with 0 failures" in result.output

    @needs_true_false
    def test_failures_do_not_change_exit_code_by_default(self, efi_tree, key_material):
        """Test that failed files are reported but exit status stays zero."""
        result = runner.invoke(
            app, [str(efi_tree), *key_args(key_material), "--signer", "false"]
        )

        assert result.exit_code == 0
        assert "ran 2 threads with 2 failures" in result.output

    @needs_true_false
    def test_strict_exits_non_zero_on_failure(self, efi_tree, key_material):
        """Test that --strict turns failed files into a failing exit status."""
        result = runner.invoke(
            app,
            [str(efi_tree), *key_args(key_material), "--signer", "false", "--strict"],
        )

        assert result.exit_code == 1
        assert "2 failures" in result.output

    @needs_true_false
    def test_strict_succeeds_without_failures(self, efi_tree, key_material):
        result = runner.invoke(
            app,
            [str(efi_tree), *key_args(key_material), "--signer", "true", "--strict"],
        )

        assert result.exit_code == 0

    @needs_true_false
    def test_verbose_lists_progress_and_failures(self, efi_tree, key_material):
        """Test that verbose mode shows progress and the failed files."""
        result = runner.invoke(
            app,
            [str(efi_tree), *key_args(key_material), "--signer", "false", "-v"],
        )

        assert "expanding:" in result.output
        assert "signing:" in result.output
        assert "Failed:" in result.output
        assert "exit status 1" in result.output

    @needs_true_false
    def test_jobs_caps_workers(self, efi_tree, key_material):
        result = runner.invoke(
            app,
            [str(efi_tree), *key_args(key_material), "--signer", "true", "-j", "1"],
        )

        assert result.exit_code == 0
        assert "ran 2 threads with 0 failures" in result.output

    def test_jobs_must_be_positive(self, efi_tree, key_material):
        result = runner.invoke(app, [str(efi_tree), *key_args(key_material), "-j", "0"])

        assert result.exit_code == 2

    @needs_true_false
    def test_key_from_environment(self, efi_tree, key_material):
        """Test that key and certificate can come from the environment."""
        key, cert = key_material

        result = runner.invoke(
            app,
            [str(efi_tree), "--signer", "true"],
            env={"SBSEVERY_KEY": str(key), "SBSEVERY_CERT": str(cert)},
        )

        assert result.exit_code == 0
        assert "ran 2 threads" in result.output

    def test_missing_root_still_completes(self, tmp_path, key_material):
        """Test that a nonexistent root is not fatal."""
        result = runner.invoke(
            app,
            [str(tmp_path / "missing"), *key_args(key_material)],
        )

        assert result.exit_code == 0
        assert "ran 0 threads with 0 failures" in result.output
