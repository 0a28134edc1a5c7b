"""
Converts a Stendhal book export into an HTML document.
Writes the document to a file when `--output` is given; otherwise, it prints it to stdout.
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import ConvertFileError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
)
from .parser import tokenize_file
from .renderer import export_to_file, export_to_writer

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="crafty-novels")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the HTML document to this file instead of stdout",
)
@click.option("--force", is_flag=True, help="Overwrite an existing output file")
@click.option("--encoding", help="Text encoding of the input file")
@click.option("-v", "--verbose", is_flag=True, help="Log progress to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output: Path | None = None,
    force: bool = False,
    encoding: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for converting a Stendhal export into HTML.

    Args:
        filepath: Path to the export to convert.
        output: Destination file; stdout when omitted.
        force: Replace `output` if it already exists.
        encoding: Override for the input encoding.
        verbose: Enable debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If CLI parameters reference invalid paths or contain
            unsupported overrides, including invalid configuration values.
        click.ClickException: If the export is malformed, too large, or cannot
            be read, or if the output cannot be written.

    Examples:
        crafty-novels diary.stendhal -o diary.html --force
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        filepath = normalize_filepath(filepath)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(filepath.parent, encoding=encoding, overwrite=force or None)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        token_list = tokenize_file(filepath, config)
    except ConvertFileError as error:
        raise click.ClickException(str(error)) from error

    # Writes to file
    if output is not None:
        try:
            export_to_file(
                token_list,
                output,
                overwrite=config.overwrite,
                warn=lambda message: click.echo(message, err=True),
            )
        except IOError as error:
            raise click.ClickException(str(error)) from error
    # Prints to stdout, as UTF-8 to match the declared charset
    else:
        stdout = io.TextIOWrapper(click.get_binary_stream("stdout"), encoding="utf-8")
        try:
            export_to_writer(token_list, stdout)
        finally:
            stdout.detach()


if __name__ == "__main__":
    cli()
