# src/kutil/cli.py
"""kutil CLI - one-shot utilization snapshot of a Kubernetes cluster."""

import asyncio
import sys
import click
import structlog

from kutil import __version__
from kutil.config.settings import LogLevel, Settings
from kutil.core.exceptions import KutilException
from kutil.core.utils import setup_logging
from kutil.discovery.orchestrator import UtilizationReportOrchestrator
from kutil.reporting.presenter import ReportPresenter

logger = structlog.get_logger(__name__)

VERSION_MESSAGE = """%(prog)s version %(version)s
Copyright (C) 2020 Jed Record
License GNU GPL version 2 <https://gnu.org/licenses/gpl-2.0.html>
This is free software; you are free to change and redistribute it.
There is NO WARRANTY, to the extent permitted by law."""


@click.command()
@click.option('--namespaces', 'show_namespaces', is_flag=True, help='Display utilization by namespaces')
@click.option('--nodes', 'show_nodes', is_flag=True, help='Display utilization by nodes')
@click.option('--cluster', 'show_cluster', is_flag=True, help='Display utilization for the cluster')
@click.option('--kubeconfig', type=click.Path(dir_okay=False), default=None,
              help='kubeconfig file (default: $KUBECONFIG or ~/.kube/config)')
@click.option('--context', default=None, help='kubeconfig context to use')
@click.option('--output', '-o', type=click.Choice(['table', 'json']), default='table', help='Output format')
@click.option('--legacy-node-memory-limit', is_flag=True,
              help='Add node memory limits into node memory requests, as kutil 0.9 did')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.version_option(__version__, prog_name="kutil", message=VERSION_MESSAGE)
def main(show_namespaces, show_nodes, show_cluster, kubeconfig, context, output, legacy_node_memory_limit, debug):
    """
    Report CPU, memory and pod slot utilization for a Kubernetes cluster.

    Requests of ready containers are summed per node, per namespace and
    for the whole cluster and compared with allocatable capacity. With no
    view selected, the node summary and the cluster summary are shown.

    Example:
        kutil --namespaces --kubeconfig ~/.kube/config
    """
    settings = Settings.create_from_env()
    if debug:
        settings.debug = True
        settings.log_level = LogLevel.DEBUG
    setup_logging(config_path=settings.log_config_path, log_level=settings.log_level.value)

    config = {
        "kubernetes": {
            **settings.kubernetes.model_dump(),
            **({"kubeconfig_path": kubeconfig} if kubeconfig else {}),
            **({"context": context} if context else {}),
        },
        "aggregation": {
            **settings.aggregation.model_dump(),
            **({"legacy_node_memory_limit": True} if legacy_node_memory_limit else {}),
        },
    }

    async def run_report():
        async with UtilizationReportOrchestrator(config) as orchestrator:
            return await orchestrator.run_report()

    try:
        cluster = asyncio.run(run_report())
    except KutilException as e:
        logger.debug("Report failed", error=e.message, details=e.details)
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    presenter = ReportPresenter(cluster)
    if output == 'json':
        click.echo(presenter.to_json())
        return

    if show_namespaces:
        presenter.print_namespace_summary()
    if show_nodes:
        presenter.print_node_summary()
    if show_cluster:
        presenter.print_cluster_summary()
    if not (show_namespaces or show_nodes or show_cluster):
        presenter.print_node_summary()
        click.echo()
        presenter.print_cluster_summary()


if __name__ == '__main__':
    main()
