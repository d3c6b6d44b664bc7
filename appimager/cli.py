import sys
from pathlib import Path
from typing import List, Optional

import typer

from appimager.config import RelativeFileSet, load_params
from appimager.errors import PackagingError
from appimager.image.builder import prepare_application_files
from appimager.image.resources import ResourceProvider
from appimager.logger import setup_logger


app = typer.Typer(
    name="appimager",
    help="appimager: lay out native application images",
    add_completion=False,
)

@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log warnings and errors",
    ),
):

    setup_logger(verbose=verbose, quiet=quiet)

@app.command()
def build(
    params_file: Path = typer.Argument(
        ...,
        help="JSON file with the application parameters",
    ),
    dest: Path = typer.Option(
        Path("dist"),
        "--dest",
        "-d",
        help="Directory the app image is created in",
    ),
    inputs: List[Path] = typer.Option(
        [],
        "--input",
        "-i",
        help="Directory whose files are copied into the app (can be passed multiple times)",
    ),
    resource_dir: Optional[Path] = typer.Option(
        None,
        "--resource-dir",
        help="Directory with resources overriding the packaged defaults",
    ),
):

    try:
        params = load_params(params_file)

        if inputs:
            scanned = [RelativeFileSet.scan(directory) for directory in inputs]
            params = params.model_copy(
                update={"app_resources": [*params.app_resources, *scanned]}
            )

        typer.echo(f"Building app image for {params.app_name}")
        image = prepare_application_files(
            params,
            output_root=dest,
            resources=ResourceProvider(resource_dir),
        )

        for warning in image.warnings:
            typer.secho(f"Warning: {warning}", fg=typer.colors.YELLOW, err=True)

        for launcher in image.launchers:
            typer.echo(f" - launcher: {launcher}")
        typer.echo(f"App image created at: {image.layout.root}")

    except PackagingError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        sys.exit(exc.exit_code)


def run_cli() -> None:
    app()


if __name__ == "__main__":
    run_cli()
