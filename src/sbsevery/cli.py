"""Command-line interface for sbsevery."""

from pathlib import Path
from typing import Annotated

import typer

from sbsevery import __version__
from sbsevery.exceptions import InvalidKeyMaterialError
from sbsevery.exceptions import SbseveryError
from sbsevery.models import DEFAULT_SIGNER
from sbsevery.models import SigningConfig
from sbsevery.operations import normalize_cert_path
from sbsevery.operations import normalize_key_path
from sbsevery.operations import sign_tree
from sbsevery.output import Diagnostics
from sbsevery.output import print_failures
from sbsevery.output import print_summary

app = typer.Typer(help="Secure boot sign every(thing)")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sbsevery {__version__}")
        raise typer.Exit()


@app.command()
def sign(
    paths: Annotated[
        list[Path], typer.Argument(help="Files or directories to sign recursively")
    ],
    key: Annotated[
        Path,
        typer.Option("--key", "-k", envvar="SBSEVERY_KEY", help="Signing key"),
    ],
    cert: Annotated[
        Path,
        typer.Option(
            "--cert", "-c", envvar="SBSEVERY_CERT", help="Signing certificate"
        ),
    ],
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Print progress to stderr")
    ] = False,
    jobs: Annotated[
        int | None,
        typer.Option(
            "--jobs",
            "-j",
            min=1,
            help="Maximum concurrent signers (default: one per file)",
        ),
    ] = None,
    signer: Annotated[
        str,
        typer.Option(envvar="SBSEVERY_SIGNER", help="Signer executable"),
    ] = DEFAULT_SIGNER,
    strict: Annotated[
        bool, typer.Option("--strict", help="Exit with status 1 if any file failed")
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version"
        ),
    ] = None,
) -> None:
    """Sign every file under PATHS in place with sbsign."""
    try:
        config = SigningConfig(
            key=normalize_key_path(key),
            cert=normalize_cert_path(cert),
            signer=signer,
            max_workers=jobs,
        )
    except InvalidKeyMaterialError as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(1) from None

    try:
        report = sign_tree(paths, config, Diagnostics(verbose=verbose))
    except SbseveryError as e:
        typer.secho(f"✗ Error: {e}", fg=typer.colors.RED, bold=True, err=True)
        raise typer.Exit(1) from None

    if verbose:
        print_failures(report)
    print_summary(report)

    if strict and report.failures:
        raise typer.Exit(1)


def main() -> None:
    """Main entry point for the sbsevery CLI."""
    app()


if __name__ == "__main__":
    main()
