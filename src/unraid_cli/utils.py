"""Utility functions for the CLI"""

import functools
import json
import logging
from typing import Any, List

import click
import yaml
from tabulate import tabulate

from .exceptions import UnraidError

logger = logging.getLogger(__name__)


def mask_secret(secret: str, visible: int = 8) -> str:
    """Show only the first characters of an API key"""
    return f"{secret[:visible]}..."


class OutputFormatter:
    """Formats output in various formats"""

    def __init__(self, format_type: str = 'table'):
        self.format_type = format_type

    @property
    def is_structured(self) -> bool:
        return self.format_type in ('json', 'yaml')

    def format_data(self, data: Any) -> str:
        """Format data as JSON or YAML"""
        if self.format_type == 'yaml':
            return self.format_yaml(data)
        return self.format_json(data)

    def format_json(self, data: Any) -> str:
        """Format as JSON"""
        return json.dumps(data, indent=2, default=str)

    def format_yaml(self, data: Any) -> str:
        """Format as YAML"""
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)

    def format_table(self, rows: List[List[Any]], headers: List[str]) -> str:
        """Format as table"""
        return tabulate(rows, headers=headers, tablefmt='simple')


def output_formatter(ctx: click.Context) -> OutputFormatter:
    """Get output formatter from context"""
    format_type = ctx.obj.get('output_format', 'table')
    return OutputFormatter(format_type)


def print_output(ctx: click.Context, data: Any):
    """Print data in the structured format selected on the command line"""
    click.echo(output_formatter(ctx).format_data(data))


def error_handler(func):
    """Decorator reporting CLI errors with the command that failed"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UnraidError as e:
            ctx = click.get_current_context()
            logger.debug("%s failed", ctx.command_path, exc_info=True)
            click.secho(f"Error: {ctx.command_path} failed: {e.message}", fg='red', err=True)
            ctx.exit(1)

    return wrapper
