"""Command-line interface for wbf."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from whatbigfile.exceptions import WbfError
from whatbigfile.utils.formatting import humanize
from whatbigfile.utils.logging import VALID_LOG_LEVELS, configure_logging

logger = logging.getLogger(__name__)

# Levels that may go to stderr while the live view holds the screen
CONSOLE_LOG_LEVELS = {'WARNING', 'ERROR'}


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Log level value to validate

    Returns:
        Normalized log level (uppercase)

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()

    if normalized_value not in VALID_LOG_LEVELS:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(VALID_LOG_LEVELS))}'
        )

    return normalized_value


# Import version from package
try:
    from importlib.metadata import PackageNotFoundError, version
    __version__ = version("whatbigfile")
except (ImportError, PackageNotFoundError):
    __version__ = "unknown"


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.option(
    '--path', '-p',
    type=click.Path(path_type=Path),
    required=True,
    help='Path to search'
)
@click.option(
    '--depth', '-d',
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help='Depth to search (value of 0 is fully recursive)'
)
@click.option(
    '--disable-symlinks', '-s',
    is_flag=True,
    help='Do not follow symbolic links'
)
@click.option(
    '--filter', '-f', 'filter_expression',
    type=str,
    default=None,
    help='Exclude every path matching this regular expression'
)
@click.option(
    '--min-size', '-m',
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help='Minimum file size to report, in bytes'
)
@click.option(
    '--output-file', '-o',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Write the final report to this CSV file'
)
@click.option(
    '--refresh-every',
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help='Redraw the table every N files (the final state is always drawn)'
)
@click.option(
    '--log-level', '-l',
    type=str,
    default='WARNING',
    callback=validate_log_level,
    help='Logging verbosity level (DEBUG, INFO, WARNING, ERROR). DEBUG and INFO require --log-file'
)
@click.option(
    '--log-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Append log output to this file instead of stderr'
)
@click.version_option(version=__version__, prog_name='wbf')
def cli(
    path: Path,
    depth: int,
    disable_symlinks: bool,
    filter_expression: str | None,
    min_size: int,
    output_file: Path | None,
    refresh_every: int,
    log_level: str,
    log_file: Path | None,
) -> None:
    """wbf - What big file?

    Scan a directory tree and show its files ranked by size in a live
    table, optionally exporting the final ranking as CSV.

    Examples:

        # Scan the current directory
        wbf --path .

        # Two levels deep, skipping anything under .git
        wbf -p ~/src -d 2 -f '/\\.git/'

        # Only files of 1 MB or more, saved to report.csv
        wbf -p /var --min-size 1000000 --output-file report.csv
    """
    from whatbigfile.app.runner import ScanRunner
    from whatbigfile.core.options import ScanOptions

    configure_logging(
        log_level=log_level,
        log_file=log_file,
        enable_console=log_level in CONSOLE_LOG_LEVELS,
    )

    try:
        options = ScanOptions.create(
            path=path,
            depth=depth,
            disable_symlinks=disable_symlinks,
            filter=filter_expression,
            min_size=min_size,
            output_file=output_file,
            refresh_every=refresh_every,
        )
        runner = ScanRunner(options)
        result = runner.run()
    except KeyboardInterrupt:
        click.echo("\nScan interrupted", err=True)
        return
    except WbfError as e:
        logger.error("Scan failed: %s", e)
        raise click.ClickException(str(e)) from e

    click.echo(
        f'{len(result.snapshot)} files, {humanize(result.snapshot.total)} total under {path}'
    )
    if result.exported_rows is not None and options.output_file is not None:
        click.echo(f'Report written to {options.output_file}')
