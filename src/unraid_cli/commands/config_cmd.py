"""Configuration commands"""

import click

from ..utils import error_handler, mask_secret, output_formatter, print_output


@click.group()
def config():
    """Manage server configurations"""
    pass


@config.command()
@click.argument('name')
@click.option('--url', required=True, help='Server URL (e.g. https://192.168.1.100/graphql)')
@click.option('--api-key', required=True, help='API key for authentication')
@click.pass_context
@error_handler
def add(ctx, name: str, url: str, api_key: str):
    """Add a new server configuration"""
    config_manager = ctx.obj['config_manager']
    cfg = config_manager.load()

    is_first = not cfg.servers
    cfg.add_server(name, url, api_key)

    # The first server becomes the default
    if is_first:
        cfg.default = name

    config_manager.save(cfg)
    click.echo(f"Server '{name}' added successfully.")

    if is_first:
        click.echo("Set as default server.")


@config.command()
@click.argument('name')
@click.pass_context
@error_handler
def remove(ctx, name: str):
    """Remove a server configuration"""
    config_manager = ctx.obj['config_manager']
    cfg = config_manager.load()

    if cfg.remove_server(name):
        config_manager.save(cfg)
        click.echo(f"Server '{name}' removed successfully.")
    else:
        click.echo(f"Server '{name}' not found.")


@config.command()
@click.argument('name')
@click.pass_context
@error_handler
def default(ctx, name: str):
    """Set the default server"""
    config_manager = ctx.obj['config_manager']
    cfg = config_manager.load()

    cfg.set_default(name)
    config_manager.save(cfg)
    click.echo(f"Default server set to '{name}'.")


@config.command(name='list')
@click.pass_context
@error_handler
def list_servers(ctx):
    """List all configured servers"""
    cfg = ctx.obj['config_manager'].load()

    if output_formatter(ctx).is_structured:
        print_output(ctx, {
            'default': cfg.default,
            'servers': {
                name: {'url': server.url, 'api_key': mask_secret(server.api_key)}
                for name, server in cfg.servers.items()
            }
        })
        return

    if not cfg.servers:
        click.echo("No servers configured.")
        click.echo("Use 'unraid config add <name> --url <url> --api-key <key>' to add a server.")
        return

    table_data = []
    for name, server in cfg.servers.items():
        table_data.append([
            '*' if name == cfg.default else '',
            name,
            server.url,
            mask_secret(server.api_key)
        ])

    headers = ['DEFAULT', 'NAME', 'URL', 'API KEY']
    click.echo(output_formatter(ctx).format_table(table_data, headers))
