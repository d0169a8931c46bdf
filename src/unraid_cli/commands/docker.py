"""Docker container commands"""

import logging

import click

from ..client import APIClient
from ..config import ResolvedConfig
from ..containers import filter_containers, resolve_container_id, truncate
from ..utils import error_handler, output_formatter, print_output

logger = logging.getLogger(__name__)

NAME_WIDTH = 30
IMAGE_WIDTH = 40
STATE_WIDTH = 10
STATUS_WIDTH = 20
ROW_FORMAT = f"{{:<{NAME_WIDTH}}} {{:<{IMAGE_WIDTH}}} {{:<{STATE_WIDTH}}} {{:<{STATUS_WIDTH}}}"


@click.group()
def docker():
    """Docker container management"""
    pass


def get_client(ctx: click.Context) -> APIClient:
    """Resolve the server for this invocation and build its client"""
    client = ctx.obj.get('client')
    if client is not None:
        return client

    resolved = ResolvedConfig.resolve(
        cli_server=ctx.obj.get('server'),
        cli_url=ctx.obj.get('url'),
        cli_api_key=ctx.obj.get('api_key'),
        config_manager=ctx.obj['config_manager']
    )
    client = APIClient(
        url=resolved.url,
        api_key=resolved.api_key,
        timeout=ctx.obj['timeout'],
        verify_ssl=ctx.obj['verify_ssl']
    )
    ctx.call_on_close(client.close)
    ctx.obj['client'] = client
    return client


def render_table(containers) -> str:
    """Fixed-width container listing"""
    lines = [
        ROW_FORMAT.format('NAME', 'IMAGE', 'STATE', 'STATUS'),
        '-' * 100,
    ]
    for container in containers:
        lines.append(ROW_FORMAT.format(
            truncate(container.display_name, NAME_WIDTH - 1),
            truncate(container.image, IMAGE_WIDTH - 1),
            container.state_name,
            truncate(container.status, STATUS_WIDTH - 1)
        ))
    return '\n'.join(lines)


def render_wide(ctx, containers) -> str:
    table_data = []
    for container in containers:
        table_data.append([
            container.id,
            container.display_name,
            container.image,
            container.state_name,
            container.status,
            ', '.join(str(p) for p in container.ports) or '-'
        ])
    headers = ['ID', 'NAME', 'IMAGE', 'STATE', 'STATUS', 'PORTS']
    return output_formatter(ctx).format_table(table_data, headers)


@docker.command(name='list-containers')
@click.option('--all', '-a', 'show_all', is_flag=True, help='Show all containers (default: only running)')
@click.pass_context
@error_handler
def list_containers(ctx, show_all: bool):
    """List Docker containers"""
    client = get_client(ctx)
    containers = filter_containers(client.list_containers(), show_all)
    formatter = output_formatter(ctx)

    if formatter.is_structured:
        print_output(ctx, [c.to_dict() for c in containers])
        return

    if not containers:
        if show_all:
            click.echo("No containers found.")
        else:
            click.echo("No running containers found. Use --all to show all containers.")
        return

    if formatter.format_type == 'wide':
        click.echo(render_wide(ctx, containers))
    else:
        click.echo(render_table(containers))


# Short alias, registered under a second name
docker.add_command(list_containers, name='ls')


def find_container(client: APIClient, name: str) -> str:
    container_id = resolve_container_id(client.list_containers(), name)
    logger.debug("Resolved container '%s' to %s", name, container_id)
    return container_id


@docker.command()
@click.argument('name')
@click.pass_context
@error_handler
def start(ctx, name: str):
    """Start a container"""
    client = get_client(ctx)
    client.start_container(find_container(client, name))
    click.echo(f"Container '{name}' started.")


@docker.command()
@click.argument('name')
@click.pass_context
@error_handler
def stop(ctx, name: str):
    """Stop a container"""
    client = get_client(ctx)
    client.stop_container(find_container(client, name))
    click.echo(f"Container '{name}' stopped.")


@docker.command()
@click.argument('name')
@click.pass_context
@error_handler
def restart(ctx, name: str):
    """Restart a container (stop, then start)"""
    client = get_client(ctx)
    container_id = find_container(client, name)

    # Not atomic: if start fails the container stays stopped
    client.stop_container(container_id)
    click.echo(f"Container '{name}' stopped.")
    client.start_container(container_id)
    click.echo(f"Container '{name}' restarted.")


@docker.command()
@click.argument('name')
@click.pass_context
@error_handler
def update(ctx, name: str):
    """Update a container to the latest image"""
    client = get_client(ctx)
    client.update_container(find_container(client, name))
    click.echo(f"Container '{name}' updated.")
