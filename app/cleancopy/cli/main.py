"""Main CLI application entry point.

Defines the Typer application that copies a tree and cleans the copy.
"""

from pathlib import Path
from typing import Annotated

import typer

from cleancopy import __version__
from cleancopy.cli.display import print_run_summary
from cleancopy.core.config import RunConfig, load_settings
from cleancopy.core.errors import CleanCopyError, ConfigError
from cleancopy.core.runner import run
from cleancopy.utils.formatting import configure_logging, print_error, print_info

app = typer.Typer(
    name="cleancopy",
    help="Copy a source tree and strip comments from the copy.",
    rich_markup_mode="rich",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cleancopy version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    source: Annotated[
        Path | None,
        typer.Option(
            "--source",
            "-s",
            help="Source directory to copy (required). Never modified.",
            show_default=False,
        ),
    ] = None,
    destination: Annotated[
        Path | None,
        typer.Option(
            "--destination",
            "-d",
            help="Destination directory (required). Replaced if created by cleancopy.",
            show_default=False,
        ),
    ] = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            help="Leave matching files uncleaned. Prefix ending in '/' or glob. Repeatable.",
            show_default=False,
        ),
    ] = None,
    no_minified: Annotated[
        bool,
        typer.Option("--no-minified", help="Leave *.min.js files uncleaned."),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file (default: ~/.config/cleancopy/config.toml).",
            show_default=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log every file decision."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress the summary table."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Copy SOURCE to DESTINATION and remove comments from .js and .ts files.

    The destination is only replaced when a previous cleancopy run created
    it; any other existing directory is refused.
    """
    configure_logging(verbose)

    try:
        if source is None:
            raise ConfigError("Missing required option --source")
        if destination is None:
            raise ConfigError("Missing required option --destination")

        settings = load_settings(config_path)
        config = RunConfig.build(
            source,
            destination,
            [*settings.exclude, *(exclude or [])],
            exclude_minified=no_minified or settings.exclude_minified,
            verbose=verbose,
        )

        if verbose:
            print_info(f"Copying {config.source_root} to {config.dest_root}")
        report = run(config)
    except CleanCopyError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_run_summary(report, config, quiet=quiet)


if __name__ == "__main__":
    app()
