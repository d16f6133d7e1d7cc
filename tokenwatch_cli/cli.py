"""
tokenwatch CLI - run the transaction extractor over files of Solana transactions
"""

import logging
import sys
from typing import Any, Dict

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tokenwatch import __version__
from tokenwatch.utils.handlers import BlockHandler, TransactionExtractor
from tokenwatch.utils.solana_constants import PROGRAM_TYPES
from tokenwatch.utils.solana_error import ValidationError

from .utils import as_block, format_output, handle_error, load_payload, setup_logging, truncate_string

logger = logging.getLogger("tokenwatch")

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])

@click.group(context_settings=CONTEXT_SETTINGS)
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx, debug, no_color):
    """tokenwatch CLI - extract SPL token transfers and NFT metadata events"""
    setup_logging(debug)

    console = Console(color_system=None if no_color else "auto")

    ctx.ensure_object(dict)
    ctx.obj['console'] = console
    ctx.obj['debug'] = debug

    logger.debug("CLI initialized")

@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table',
              help='Output format')
@click.option('--output', type=click.Path(), help='Save JSON output to file')
@click.option('--prefilter', is_flag=True, help='Skip transactions that reference no tracked program')
@click.option('--fail-on-errors/--skip-errors', default=False,
              help='Exit with status 1 if any transaction could not be decoded')
@click.pass_context
def extract(ctx, path, output_format, output, prefilter, fail_on_errors):
    """Extract events from a file of transactions (JSON, JSON array, block or JSON Lines)"""
    console = ctx.obj['console']

    try:
        block = as_block(load_payload(path))
    except (ValidationError, OSError) as e:
        handle_error(e, console)
        sys.exit(2)

    handler = BlockHandler(TransactionExtractor(), prefilter=prefilter)
    summary = handler.process_block(block)

    if output or output_format == 'json':
        format_output(summary, output, console)
    else:
        _display_summary(console, summary)

    if fail_on_errors and summary['errors']:
        sys.exit(1)

@cli.command()
@click.pass_context
def programs(ctx):
    """List the programs and instruction variants the extractor decodes"""
    console = ctx.obj['console']
    extractor = TransactionExtractor()

    table = Table(title="Tracked Programs")
    table.add_column("Program ID", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Discriminant", justify="right")
    table.add_column("Instruction")
    table.add_column("Inner", justify="center")

    for program_id, handler in extractor.program_handlers.items():
        for discriminant, layout in sorted(handler.LAYOUTS.items()):
            table.add_row(
                program_id,
                PROGRAM_TYPES.get(program_id, handler.program_name),
                str(discriminant),
                layout.name,
                "yes" if handler.decodes_inner else "no"
            )

    console.print(table)

def _display_summary(console: Console, summary: Dict[str, Any]):
    """Display extracted events as tables"""
    stats = summary['statistics']
    console.print(Panel(
        f"[bold]{stats['total_transactions']}[/bold] transactions, "
        f"[green]{stats['matched_transactions']} matched[/green], "
        f"{stats['skipped_transactions']} skipped, "
        f"[red]{stats['failed_transactions']} failed[/red]",
        title="Extraction Summary",
        expand=False
    ))

    transfers = Table(title="SPL Token Transfers")
    transfers.add_column("Type", style="cyan")
    transfers.add_column("Signature")
    transfers.add_column("Sender")
    transfers.add_column("Receiver")
    transfers.add_column("Mint")
    transfers.add_column("Amount", justify="right", style="green")
    transfers.add_column("Slot", justify="right")

    nfts = Table(title="NFT Metadata Events")
    nfts.add_column("Action", style="cyan")
    nfts.add_column("Signature")
    nfts.add_column("Metadata")
    nfts.add_column("Mint")
    nfts.add_column("Update Authority")
    nfts.add_column("Slot", justify="right")

    for result in summary['results']:
        for event in result['splToken']:
            transfers.add_row(
                event['type'],
                truncate_string(event['signature']),
                truncate_string(event['sender']),
                truncate_string(event['receiver']),
                truncate_string(event.get('mint')),
                event['amount'],
                str(event['slot'])
            )
        for event in result['nft']:
            nfts.add_row(
                event['action'],
                truncate_string(event['signature']),
                truncate_string(event['metadata']),
                truncate_string(event.get('mint')),
                truncate_string(event.get('updateAuthority')),
                str(event['slot'])
            )

    if transfers.row_count:
        console.print(transfers)
    if nfts.row_count:
        console.print(nfts)

    for error in summary['errors']:
        console.print(f"[red]{error.get('signature') or 'unknown'}: {error['error']}[/red]")

if __name__ == '__main__':
    cli()
