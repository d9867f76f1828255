"""Command-line interface for dc_download using Click."""

import asyncio
import logging
import sys
from typing import List, Optional, Tuple

import click
import httpx

from dc_download import __version__
from dc_download.config import TOKEN_ENV_VAR, Config
from dc_download.exceptions import DcDownloadError
from dc_download.models.options import (
    FILENAME_FIELDS,
    SIZES,
    default_filename_field,
    default_size,
)
from dc_download.pipeline import download_item


# Setup logging - default to WARNING to avoid interfering with progress bars
# INFO and DEBUG logs are only shown when --verbose is used
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def usage_text(errors: Optional[List[str]] = None) -> str:
    """Build the help screen, preceded by any validation errors in red."""
    lines = []

    if errors:
        lines.append(click.style('\n'.join(errors), fg='red'))
        lines.append('')

    lines += [
        'NYPL Digital Collections Image Downloader - see https://github.com/nypl-spacetime/dc-download',
        '',
        'Usage: dc-download [-h] [-t <api-token>] [-o <path>] [-f <filename>] [-s <size>] <uuid-of-item>',
        f'  -t, --token      Digital Collections API access token (or set ${TOKEN_ENV_VAR}), '
        'see http://api.repo.nypl.org/',
        f'  -s, --size       size/type of images to be downloaded - see below '
        f'(default is "{default_size().code}")',
        f'  -f, --filename   field to be used as filename for downloaded files - see below '
        f'(default is "{default_filename_field().name}")',
        '  -o, --output     output directory (default is current directory)',
        '  --overwrite      download files again even if they already exist',
        '  --timeout        request timeout in seconds',
        '  --max-retries    maximum attempts per request',
        '  --no-progress    do not show a progress bar',
        '  --verbose        enable verbose logging',
        '  --version        show version and exit',
        '',
        'Possible image sizes and types:',
    ]

    for size in SIZES:
        marker = '*' if size.public_domain_only else ''
        lines.append(f'   {size.code}        {size.description}{marker}')

    lines += [
        '            (sizes with * exist only for public domain assets)',
        '',
        'Possible filename fields:',
    ]

    for field in FILENAME_FIELDS:
        lines.append(f'   {field.name:<5}    {field.description}')

    lines += [
        '',
        "Go to http://digitalcollections.nypl.org/ to browse NYPL's Digital Collections",
    ]

    return '\n'.join(lines).strip()


@click.command(add_help_option=False)
@click.argument('items', nargs=-1)
@click.option('--help', '-h', 'show_help', is_flag=True, help='Show help and exit')
@click.option('--token', '-t', help='Digital Collections API access token')
@click.option('--size', '-s', default=default_size().code, help='Image size/type code')
@click.option('--filename', '-f', default=default_filename_field().name, help='Filename field')
@click.option('--output', '-o', default='./', help='Output directory')
@click.option('--overwrite', is_flag=True, help='Re-download existing files')
@click.option('--timeout', default=60, help='Request timeout in seconds')
@click.option('--max-retries', default=3, help='Maximum retry attempts')
@click.option('--no-progress', is_flag=True, help='Hide the progress bar')
@click.option('--verbose', is_flag=True, help='Enable verbose logging')
@click.option('--version', is_flag=True, help='Show version and exit')
@click.pass_context
def cli(
    ctx: click.Context,
    items: Tuple[str, ...],
    show_help: bool,
    token: Optional[str],
    size: str,
    filename: str,
    output: str,
    overwrite: bool,
    timeout: int,
    max_retries: int,
    no_progress: bool,
    verbose: bool,
    version: bool,
):
    """Download all images of an NYPL Digital Collections item.

    Example:
        dc-download -s g -f page -o ./images 510d47da-ef7a-a3d9-e040-e00a18064a99
    """
    if version:
        click.echo(f"dc-download version {__version__}")
        ctx.exit()

    # Enable verbose logging if requested
    if verbose:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger('httpx').setLevel(logging.INFO)

    config = Config(
        token=token,
        size=size,
        filename=filename,
        output_dir=output,
        timeout=timeout,
        max_retries=max_retries,
        overwrite=overwrite,
        show_progress=not no_progress,
    )

    errors = []
    if len(items) > 1:
        errors.append('Please supply no more than one item')
    errors += config.validate()

    if show_help or not items or errors:
        click.echo(usage_text(errors))
        ctx.exit(1 if errors else 0)

    uuid = items[0]

    try:
        result = asyncio.run(download_item(config, uuid))
    except (DcDownloadError, httpx.HTTPError) as e:
        logger.debug("Download failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.info(
        f"Item {result.uuid}: {result.total} files, {result.downloaded} downloaded, "
        f"{result.skipped} skipped, saved to {result.save_path}"
    )
    click.echo('Done')


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == '__main__':
    main()
