#!/usr/bin/env python3
"""
TopShot Transaction Generator - Command Line Interface

Generates Cadence transaction scripts for the TopShot contract: minting
moments, managing sets and plays, fulfilling packs and transferring the
admin resource. Generated scripts are printed or written to a file; the CLI
never submits them.
"""

from typing import Optional

import click
import yaml

from cadence.values import Address
from cli import __version__
from cli.config import PROFILES
from cli.context import CLIContext, pass_context
from cli.params import ADDRESS


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--config-file', '-c',
              type=click.Path(exists=True, dir_okay=False),
              help='Path to configuration file (YAML or JSON)')
@click.option('--profile', '-p',
              type=click.Choice(sorted(PROFILES)),
              help='Network profile supplying default contract addresses')
@click.option('--contract', '-a',
              type=ADDRESS,
              help='TopShot contract address (overrides configuration)')
@click.option('--output-format', '-o',
              type=click.Choice(['table', 'json', 'yaml']),
              help='Output format for listings')
@click.option('--verbose', '-v',
              count=True,
              help='Increase verbosity (-v for INFO, -vv for DEBUG)')
@click.version_option(__version__, prog_name='topshot-txgen')
@pass_context
def cli(ctx: CLIContext, config_file: Optional[str], profile: Optional[str],
        contract: Optional[Address], output_format: Optional[str], verbose: int):
    """
    TopShot transaction generator

    Generate Cadence transaction scripts for the TopShot contract.

    Examples:
        topshot-txgen -p emulator generate mint-moment --set-id 1 --play-id 2 --recipient 0x01cf0e2f2f715450
        topshot-txgen -a 0x0b2a3299cc857e29 generate create-set --name "Series 1"
        topshot-txgen templates list -o json
    """
    ctx.config_file = config_file
    ctx.profile = profile
    ctx.output_format = output_format
    ctx.verbose = verbose

    ctx.setup_logging()
    try:
        ctx.load_config()
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Failed to load configuration: {e}")

    if contract is not None:
        ctx.config.set('contracts.topshot', contract.hex())

    ctx.logger.debug("CLI initialized with context")


def register_commands():
    """Register all command modules with the main CLI."""
    from cli.commands.config import config
    from cli.commands.generate import generate
    from cli.commands.templates import templates

    cli.add_command(config)
    cli.add_command(generate)
    cli.add_command(templates)


register_commands()


def main():
    """Console script entry point."""
    cli()


if __name__ == '__main__':
    main()
