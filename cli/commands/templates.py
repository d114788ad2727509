#!/usr/bin/env python3
"""
Template Catalog Commands for the TopShot transaction CLI
"""

import click

from cli.context import CLIContext, pass_context
from transactions.templates import TemplateType, get_template_info, get_template_registry


@click.group()
@pass_context
def templates(ctx: CLIContext):
    """
    Transaction template catalog commands.

    Inspect the available templates, their slots and imports.
    """
    ctx.logger.debug("Templates command group invoked")


@templates.command('list')
@pass_context
def list_templates(ctx: CLIContext):
    """List all transaction templates."""
    entries = get_template_registry().list_templates()

    if ctx.output_format == 'table':
        entries = [
            {
                "type": entry["type"],
                "operation": entry["operation"],
                "slots": ", ".join(slot["name"] for slot in entry["slots"]),
            }
            for entry in entries
        ]

    ctx.output(entries)


@templates.command('show')
@click.argument('template_type', type=click.Choice([t.value for t in TemplateType]))
@click.option('--source', 'show_source', is_flag=True, help='Print the Cadence source only')
@pass_context
def show_template(ctx: CLIContext, template_type: str, show_source: bool):
    """Show details for one template."""
    info = get_template_info(TemplateType(template_type))

    if show_source:
        click.echo(info["source"], nl=False)
        return

    ctx.output(info)
