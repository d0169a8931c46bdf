"""Main CLI entry point"""

import click
import colorama

from . import __version__
from .client import DEFAULT_TIMEOUT
from .config import ConfigManager, ENV_SERVER, ENV_URL, ENV_API_KEY
from .commands import config_cmd, docker
from .logging_config import setup_logging


@click.group()
@click.option('--server', help=f'Server name from config to use [env: {ENV_SERVER}]')
@click.option('--url', help=f'Server URL (overrides config and env) [env: {ENV_URL}]')
@click.option('--api-key', help=f'API key (overrides config and env) [env: {ENV_API_KEY}]')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), envvar='UNRAID_CONFIG',
              help='Config file location (default: per-user config directory)')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), default=DEFAULT_TIMEOUT,
              envvar='UNRAID_TIMEOUT', show_default=True, help='Request timeout in seconds')
@click.option('--verify-ssl/--no-verify-ssl', default=False, show_default=True,
              help='Verify TLS certificates (Unraid servers usually use self-signed ones)')
@click.option('--output', '-o', type=click.Choice(['table', 'wide', 'json', 'yaml']),
              default='table', help='Output format')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.version_option(__version__, prog_name='unraid')
@click.pass_context
def cli(ctx, server, url, api_key, config_path, timeout, verify_ssl, output, verbose):
    """CLI client for the Unraid API"""
    colorama.just_fix_windows_console()
    setup_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj.setdefault('config_manager', ConfigManager(config_path))
    ctx.obj.update({
        'server': server,
        'url': url,
        'api_key': api_key,
        'timeout': timeout,
        'verify_ssl': verify_ssl,
        'output_format': output
    })


cli.add_command(config_cmd.config)
cli.add_command(docker.docker)


def main():
    cli(prog_name='unraid')


if __name__ == '__main__':
    main()
