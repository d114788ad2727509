#!/usr/bin/env python3
"""
Script Generation Commands for the TopShot transaction CLI

One command per transaction template. Each command builds an operation
request from its options, composes the script and writes it to stdout or
to a file.
"""

import json
from pathlib import Path
from typing import Optional, Tuple

import click
import yaml

from cadence.values import Address
from cli.context import CLIContext, pass_context, handle_cli_error, parse_key_values
from cli.params import ADDRESS
from plays.metadata import PlayMetadataValidator
from transactions.composer import compose
from transactions.operations import (
    OperationRequest,
    MintSingle,
    MintBatch,
    AddItemToGrouping,
    AddItemsToGrouping,
    CreateMetadataRecord,
    CreateGrouping,
    FulfillBundle,
    TransferAdminCapability,
)


output_option = click.option(
    '--output-file', '-f',
    type=click.Path(dir_okay=False, writable=True),
    help='Write the script to a file instead of stdout'
)


def _emit(ctx: CLIContext, operation: OperationRequest, output_file: Optional[str]):
    """Compose the operation against the configured TopShot address and write it out."""
    contract_address = ctx.get_address('topshot', 'TopShot')
    script = compose(operation, contract_address)

    if output_file:
        Path(output_file).write_bytes(script)
        ctx.logger.info(f"Wrote {len(script)} bytes to {output_file}")
    else:
        click.echo(script.decode('utf-8'), nl=False)


def _load_metadata_file(path: str) -> dict:
    """Load a metadata record from a JSON or YAML file."""
    file_path = Path(path)
    try:
        with open(file_path, 'r') as f:
            if file_path.suffix in ['.yml', '.yaml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise click.BadParameter(f"Cannot read {path}: {e}", param_hint="--metadata-file")

    if not isinstance(data, dict):
        raise click.BadParameter("Metadata file must contain a mapping", param_hint="--metadata-file")
    return data


@click.group()
@pass_context
def generate(ctx: CLIContext):
    """
    Transaction script generation commands.

    Scripts are written to stdout unless --output-file is given.
    """
    ctx.logger.debug("Generate command group invoked")


@generate.command('mint-moment')
@click.option('--set-id', type=int, required=True, help='Set to mint from')
@click.option('--play-id', type=int, required=True, help='Play to mint')
@click.option('--recipient', type=ADDRESS, required=True, help='Account receiving the moment')
@output_option
@pass_context
@handle_cli_error
def mint_moment(ctx: CLIContext, set_id: int, play_id: int, recipient: Address,
                output_file: Optional[str]):
    """Mint a single moment into the recipient's collection."""
    _emit(ctx, MintSingle(set_id=set_id, play_id=play_id, recipient=recipient), output_file)


@generate.command('batch-mint')
@click.option('--set-id', type=int, required=True, help='Set to mint from')
@click.option('--play-id', type=int, required=True, help='Play to mint')
@click.option('--quantity', type=int, required=True, help='Number of moments to mint')
@click.option('--recipient', type=ADDRESS, required=True, help='Account receiving the moments')
@output_option
@pass_context
@handle_cli_error
def batch_mint(ctx: CLIContext, set_id: int, play_id: int, quantity: int, recipient: Address,
               output_file: Optional[str]):
    """Mint several moments of one set/play combination."""
    operation = MintBatch(set_id=set_id, play_id=play_id, quantity=quantity, recipient=recipient)
    _emit(ctx, operation, output_file)


@generate.command('add-play')
@click.option('--set-id', type=int, required=True, help='Set receiving the play')
@click.option('--play-id', type=int, required=True, help='Play to add')
@output_option
@pass_context
@handle_cli_error
def add_play(ctx: CLIContext, set_id: int, play_id: int, output_file: Optional[str]):
    """Add a play to a set."""
    _emit(ctx, AddItemToGrouping(set_id=set_id, item_id=play_id), output_file)


@generate.command('add-plays')
@click.option('--set-id', type=int, required=True, help='Set receiving the plays')
@click.option('--play-id', 'play_ids', type=int, multiple=True, help='Play to add (repeatable, order kept)')
@output_option
@pass_context
@handle_cli_error
def add_plays(ctx: CLIContext, set_id: int, play_ids: Tuple[int, ...], output_file: Optional[str]):
    """Add several plays to a set."""
    _emit(ctx, AddItemsToGrouping(set_id=set_id, item_ids=play_ids), output_file)


@generate.command('create-play')
@click.option('--field', 'fields', multiple=True, metavar='KEY=VALUE',
              help='Metadata field (repeatable)')
@click.option('--metadata-file', type=click.Path(exists=True, dir_okay=False),
              help='JSON or YAML file holding the metadata record')
@click.option('--strict', is_flag=True, help='Require FullName in the metadata')
@output_option
@pass_context
@handle_cli_error
def create_play(ctx: CLIContext, fields: Tuple[str, ...], metadata_file: Optional[str],
                strict: bool, output_file: Optional[str]):
    """Create a play from a metadata record."""
    record = _load_metadata_file(metadata_file) if metadata_file else {}
    record.update(parse_key_values(fields))

    errors = PlayMetadataValidator(strict=strict).get_validation_errors(record)
    if errors:
        raise click.ClickException("Invalid play metadata: " + "; ".join(errors))

    _emit(ctx, CreateMetadataRecord(fields=record), output_file)


@generate.command('create-set')
@click.option('--name', required=True, help='Set name')
@output_option
@pass_context
@handle_cli_error
def create_set(ctx: CLIContext, name: str, output_file: Optional[str]):
    """Create a new set."""
    _emit(ctx, CreateGrouping(name=name), output_file)


@generate.command('fulfill-pack')
@click.option('--recipient', type=ADDRESS, required=True, help='Account receiving the pack')
@click.option('--moment-id', 'moment_ids', type=int, multiple=True,
              help='Moment to transfer (repeatable, order kept)')
@output_option
@pass_context
@handle_cli_error
def fulfill_pack(ctx: CLIContext, recipient: Address, moment_ids: Tuple[int, ...],
                 output_file: Optional[str]):
    """Transfer a pack of moments from the signer to the recipient."""
    _emit(ctx, FulfillBundle(recipient=recipient, item_ids=moment_ids), output_file)


@generate.command('transfer-admin')
@click.option('--receiver', type=ADDRESS,
              help='TopshotAdminReceiver contract address (default: contracts.receiver)')
@output_option
@pass_context
@handle_cli_error
def transfer_admin(ctx: CLIContext, receiver: Optional[Address], output_file: Optional[str]):
    """Move the Admin resource into the admin receiver contract."""
    if receiver is None:
        receiver = ctx.get_address('receiver', 'TopshotAdminReceiver')
    _emit(ctx, TransferAdminCapability(grantee_address=receiver), output_file)
