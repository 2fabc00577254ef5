#!/usr/bin/env python3
"""
Site Build CLI

Renders a markdown content tree through layout templates into an HTML output tree.

Commands:
    build - Build the site (one pass)
    sizes - List output files with their sizes

Examples:\n

    build_site.py build                                     # Paths from .env / defaults

    build_site.py build src/content src/templates dist      # Explicit paths

    build_site.py build --config site.yaml --fail-fast      # YAML config, stop on first error

    build_site.py build -c site.yaml --sizes                # Build, then print output sizes

    build_site.py sizes dist                                # Size report only
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from pressroom.config import LOGS_PATH, OUTPUT_PATH, load_build_config
from pressroom.contexts.rendering import SiteBuilder
from pressroom.contexts.rendering.logger import setup_rendering_logger
from pressroom.contexts.rendering.report import collect_output_sizes, log_output_sizes
from pressroom.exceptions import ConfigurationError, PressroomError
from pressroom.utils.timestamp import now

app = typer.Typer(
    help="Render markdown content through Jinja2 layouts into a static HTML site",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("build")
def build_command(
    content_path: Annotated[
        Optional[Path],
        typer.Argument(help="Markdown content root (default: from config or PRESSROOM_CONTENT_PATH)"),
    ] = None,
    templates_path: Annotated[
        Optional[Path],
        typer.Argument(help="Layout templates root (default: from config or PRESSROOM_TEMPLATES_PATH)"),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Argument(help="Output root (default: from config or PRESSROOM_OUTPUT_PATH)"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="YAML build configuration",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    fail_fast: Annotated[
        bool,
        typer.Option("--fail-fast", help="Stop at the first document that fails"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output on the console"),
    ] = False,
    sizes: Annotated[
        bool,
        typer.Option("--sizes", help="Print output file sizes after the build"),
    ] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Session log directory (default: <logs>/build_<timestamp>)"),
    ] = None,
):
    """
    Build the site in one pass.

    Exits with code 1 when the configuration is invalid or any document fails.

    Examples:\n

        $ build_site.py build                                 # Build with defaults

        $ build_site.py build -c site.yaml -v                 # Verbose, config from YAML
    """
    try:
        config = load_build_config(
            config_path,
            content_path=content_path,
            templates_path=templates_path,
            output_path=output_path,
            fail_fast=True if fail_fast else None,
        )
    except ConfigurationError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_file = setup_rendering_logger(
        log_dir or LOGS_PATH / f"build_{now()}", config.templates_path, verbose=verbose
    )

    typer.secho(f"\nBuilding: {config.content_path}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Templates: {config.templates_path}")
    typer.echo(f"Output: {config.output_path}")
    typer.echo("")

    try:
        result = SiteBuilder(config).build()
    except ConfigurationError as e:
        typer.secho(f"Configuration error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except PressroomError as e:
        typer.secho(f"✗ Build stopped: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if sizes:
        log_output_sizes(config.output_path)

    typer.echo("")
    if result.success:
        typer.secho("✓ Build succeeded", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("✗ Build finished with failures", fg=typer.colors.RED, bold=True)
        for failure in result.failures:
            typer.echo(f"  - {failure.path} [{failure.phase}]")

    typer.echo(f"  Pages: {len(result.written)}")
    typer.echo(f"  Directories: {len(result.directories)}")
    typer.echo(f"  Time: {result.elapsed:.2f}s")
    typer.echo(f"  Log: {log_file}")
    typer.echo("")

    if not result.success:
        raise typer.Exit(code=1)


@app.command("sizes")
def sizes_command(
    output_path: Annotated[
        Path,
        typer.Argument(help="Built site root", exists=True, file_okay=False),
    ] = OUTPUT_PATH,
):
    """
    List every file in a built site with its size.

    Examples:\n

        $ build_site.py sizes dist
    """
    for relative_path, label in collect_output_sizes(output_path):
        typer.echo(f"{label}\t{relative_path}")


if __name__ == "__main__":
    app()
