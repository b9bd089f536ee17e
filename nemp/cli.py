import logging
from pathlib import Path

import typer

from nemp import __version__
from nemp.assets import OUTPUT_ASSETS, collect_assets

cli = typer.Typer(help="nemp build helpers", no_args_is_help=True)


@cli.command()
def assets(
    project_root: Path = typer.Argument(
        Path("."), help="Project directory holding src/assets"
    ),
    out: Path = typer.Option(
        OUTPUT_ASSETS, "--out", "-o", help="Output directory, relative to the project"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Copy project and framework assets into the build output."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    if not project_root.is_dir():
        typer.echo(f"Not a directory: {project_root}", err=True)
        raise typer.Exit(code=1)
    copied = collect_assets(project_root, out)
    typer.echo(f"Copied {len(copied)} file(s) into {project_root / out}")


@cli.command()
def version() -> None:
    """Print the installed nemp version."""
    typer.echo(__version__)


def main() -> None:
    cli()
