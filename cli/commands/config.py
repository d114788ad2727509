#!/usr/bin/env python3
"""
Configuration Commands for the TopShot transaction CLI
"""

import sys
from typing import Optional

import click

from cli.config import CONFIG_SEARCH_PATHS, PROFILES
from cli.context import CLIContext, pass_context


@click.group()
@pass_context
def config(ctx: CLIContext):
    """
    Configuration management commands.

    Show and validate the merged configuration.
    """
    ctx.logger.debug("Config command group invoked")


@config.command('show')
@click.option('--key', help='Dot-separated key to show (e.g. contracts.topshot)')
@click.option('--sources', is_flag=True, help='Show configuration sources')
@pass_context
def show_config(ctx: CLIContext, key: Optional[str], sources: bool):
    """Show the merged configuration."""
    if sources:
        ctx.output({"sources": ctx.config.get_sources()})
        return

    if key:
        ctx.output({key: ctx.config.get(key)})
    else:
        ctx.output(ctx.config.load())


@config.command('validate')
@pass_context
def validate_config(ctx: CLIContext):
    """Validate the merged configuration."""
    errors = ctx.config.validate()

    if errors:
        for error in errors:
            click.echo(f"✗ {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")


@config.command('profiles')
@pass_context
def list_profiles(ctx: CLIContext):
    """List network profiles and their contract addresses."""
    ctx.output([
        {"profile": name, "topshot": profile["contracts"].get("topshot", "")}
        for name, profile in sorted(PROFILES.items())
    ])


@config.command('search-paths')
def search_paths():
    """Show configuration file search paths."""
    for path in CONFIG_SEARCH_PATHS:
        marker = "✓" if path.exists() else " "
        click.echo(f"{marker} {path}")
