"""
Shared CLI context for the TopShot transaction CLI

Holds the state shared across command groups: configuration, logging,
output formatting and contract address resolution.
"""

import sys
import json
import logging
import functools
from typing import Any, Dict, Optional

import click
import yaml

from cadence.exceptions import ComposeError
from cadence.values import Address
from cli.config import ConfigurationManager


class CLIContext:
    """Global CLI context for sharing state across commands."""

    def __init__(self):
        self.config_file: Optional[str] = None
        self.profile: Optional[str] = None
        self.output_format: Optional[str] = None
        self.verbose: int = 0
        self.config: Optional[ConfigurationManager] = None
        self.logger: logging.Logger = logging.getLogger('topshot-cli')

    def setup_logging(self):
        """Configure logging based on verbosity level."""
        log_levels = {
            0: logging.WARNING,
            1: logging.INFO,
            2: logging.DEBUG
        }

        level = log_levels.get(min(self.verbose, 2), logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        # Library modules log under their package names
        for name in ('topshot-cli', 'transactions', 'cadence'):
            logger = logging.getLogger(name)
            logger.setLevel(level)
            logger.handlers = [handler]

    def load_config(self):
        """Load configuration from profile, files and environment."""
        self.config = ConfigurationManager(self.config_file, self.profile)
        self.config.load()
        self.logger.debug(f"Configuration sources: {', '.join(self.config.get_sources())}")

        if self.output_format is None:
            self.output_format = self.config.get('cli.output_format', 'table')

    def get_address(self, name: str, label: str) -> Address:
        """
        Resolve a configured contract address.

        Raises:
            click.UsageError: If the address is not configured
        """
        address = self.config.get_address(name)
        if address is None:
            raise click.UsageError(
                f"No {label} contract address configured; "
                f"use --profile, a config file or {'--contract' if name == 'topshot' else '--receiver'}"
            )
        return address

    def output(self, data: Any, format_override: Optional[str] = None):
        """Output data in specified format."""
        format_type = format_override or self.output_format or 'table'

        if format_type == "json":
            click.echo(json.dumps(data, indent=2, default=str))
        elif format_type == "yaml":
            click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), nl=False)
        elif format_type == "table":
            self._output_table(data)
        else:
            click.echo(str(data))

    def _output_table(self, data: Any):
        """Output data in table format."""
        if isinstance(data, dict):
            # Simple key-value table
            for key, value in data.items():
                click.echo(f"{key:20} {value}")
        elif isinstance(data, list) and data:
            if isinstance(data[0], dict):
                headers = list(data[0].keys())
                click.echo(" | ".join(f"{h:15}" for h in headers))
                click.echo("-" * (len(headers) * 17))
                for item in data:
                    values = [str(item.get(h, ""))[:15] for h in headers]
                    click.echo(" | ".join(f"{v:15}" for v in values))
            else:
                for item in data:
                    click.echo(item)
        else:
            click.echo(str(data))


# Global context instance
pass_context = click.make_pass_decorator(CLIContext, ensure=True)


def handle_cli_error(func):
    """Decorator that reports generation errors and exits with status 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ComposeError as e:
            ctx = click.get_current_context().find_object(CLIContext)
            if ctx and ctx.verbose >= 2:
                ctx.logger.exception("Script generation failed")
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    return wrapper


def parse_key_values(pairs) -> Dict[str, str]:
    """Parse KEY=VALUE pairs into a dict."""
    result = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got {pair!r}")
        result[key] = value
    return result
