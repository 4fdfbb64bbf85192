#!/usr/bin/env python3
"""
Nym Exporter CLI Interface
"""

import asyncio
import logging
import re
import sys
from typing import List, Sequence

import click

from . import __version__
from .config import DEFAULT_EXPLORER_URL, DEFAULT_PORT, DEFAULT_TIMEOUT, ExporterConfig
from .exceptions import NymExporterException
from .explorer import ExplorerClient
from .exporter import MetricsExporter, setup_logging
from .utils import print_object_flattened

logger = logging.getLogger(__name__)

# Leading integer of a --node value: "12abc" and "1.5" read as 12 and 1
NODE_ID_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")


def parse_node_ids(values: Sequence[str]) -> List[int]:
    """Parse --node values by their leading integer, dropping values without one"""
    node_ids = []
    for value in values:
        match = NODE_ID_PREFIX.match(value)
        if match is None:
            click.echo(f"Warning: ignoring invalid node ID {value!r}", err=True)
            continue
        node_ids.append(int(match.group(1)))
    return node_ids


@click.group()
@click.version_option(version=__version__, prog_name="nym-exporter")
@click.option('--explorer-url', envvar='NYM_EXPLORER_URL', default=DEFAULT_EXPLORER_URL, show_default=True,
              help='Base URL of the Nym explorer API')
@click.option('--timeout', envvar='NYM_EXPLORER_TIMEOUT', type=float, default=DEFAULT_TIMEOUT, show_default=True,
              help='Explorer request timeout in seconds')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--quiet', is_flag=True, help='Suppress output except results')
@click.pass_context
def cli(ctx, explorer_url, timeout, debug, quiet):
    """Nym nodes and addresses details: console dumps and Prometheus exporter"""

    # Set up logging
    if debug:
        setup_logging(logging.DEBUG)
    elif quiet:
        setup_logging(logging.ERROR)
    else:
        setup_logging(logging.INFO)

    try:
        ctx.obj = ExporterConfig(explorer_url=explorer_url, timeout=timeout)
    except NymExporterException as e:
        raise click.BadParameter(str(e))


@cli.command()
@click.option('--port', envvar='NYM_EXPORTER_PORT', type=click.IntRange(1, 65535), default=DEFAULT_PORT,
              show_default=True, help='Port to serve /metrics/ on')
@click.pass_obj
def exporter(config, port):
    """Nodes and addresses details prometheus exporter"""
    import uvicorn
    from .server import create_app

    click.echo(f"Starting exporter on port {port}", err=True)
    app = create_app(MetricsExporter(ExplorerClient(config)), concurrency=config.http_concurrency)
    uvicorn.run(app, host="0.0.0.0", port=port)


@cli.command()
@click.option('--node', 'nodes', multiple=True, help='Node ID, read up to the first non-digit (repeatable)')
@click.pass_obj
def node(config, nodes):
    """Node info"""
    client = ExplorerClient(config)
    output = ""
    try:
        for node_id in parse_node_ids(nodes):
            output += print_object_flattened(client.get_node(node_id), str(node_id))
    except NymExporterException as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        client.close()
    click.echo(output)


@cli.command()
@click.option('--address', 'addresses', multiple=True, help='Account address (repeatable)')
@click.pass_obj
def addr(config, addresses):
    """Address info"""
    client = ExplorerClient(config)
    output = ""
    try:
        for address in addresses:
            account = client.get_account(address)
            output += print_object_flattened(account, account.address)
    except NymExporterException as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        client.close()
    click.echo(output)


@cli.command()
@click.option('--node', 'nodes', multiple=True, help='Node ID, read up to the first non-digit (repeatable)')
@click.option('--address', 'addresses', multiple=True, help='Account address (repeatable)')
@click.pass_obj
def export(config, nodes, addresses):
    """Export nodes or addresses to prometheus format"""
    client = ExplorerClient(config)
    metrics_exporter = MetricsExporter(client)

    async def _export():
        async for block in metrics_exporter.stream_exports(node_ids=parse_node_ids(nodes), addresses=list(addresses)):
            click.echo(block)

    try:
        asyncio.run(_export())
    finally:
        client.close()


if __name__ == '__main__':
    cli()
