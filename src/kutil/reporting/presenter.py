"""Text table rendering of a finished ClusterRecord."""

from typing import Callable, List, Sequence
import click

from kutil.models.utilization_models import ClusterRecord
from kutil.reporting.formatting import fmt_cpu, fmt_mem, fmt_milli, fmt_mib, fmt_pct


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> List[str]:
    """Left-aligned columns separated by two spaces, sized to the widest cell."""
    widths = [len(header) for header in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    return [line(headers)] + [line(row) for row in rows]


class ReportPresenter:
    """Renders node, namespace and cluster summaries.

    Reads the record only; rows are sorted by name so output is stable.
    """

    def __init__(self, cluster: ClusterRecord, echo: Callable[[str], None] = click.echo):
        self.cluster = cluster
        self.echo = echo

    def node_summary_lines(self) -> List[str]:
        headers = ("NODE", "STATUS", "ROLE", "TAINTS", "CPU REQ", "MEM REQ", "PODS")
        rows = [
            (
                name,
                node.status,
                node.role,
                node.taints,
                fmt_pct(node.cpu.utilization),
                fmt_pct(node.memory.utilization),
                fmt_pct(node.pods.utilization),
            )
            for name, node in sorted(self.cluster.nodes.items())
        ]
        return render_table(headers, rows)

    def namespace_summary_lines(self) -> List[str]:
        headers = ("NAMESPACE", "CPU REQ", "UTIL", "MEM REQ", "UTIL", "PODS", "UTIL")
        rows = [
            (
                name,
                fmt_milli(ns.cpu.requested),
                fmt_pct(ns.cpu.utilization),
                fmt_mib(ns.memory.requested),
                fmt_pct(ns.memory.utilization),
                str(ns.pods.in_use),
                fmt_pct(ns.pods.utilization),
            )
            for name, ns in sorted(self.cluster.namespaces.items())
        ]
        return render_table(headers, rows)

    def cluster_summary_lines(self) -> List[str]:
        c = self.cluster
        headers = ("CLUSTER RESOURCES", "REQUESTED", "AVAILABLE", "CAPACITY", "UTIL")
        rows = [
            ("CPU", fmt_cpu(c.cpu.requested), fmt_cpu(c.cpu.available), fmt_cpu(c.cpu.capacity),
             fmt_pct(c.cpu.utilization)),
            ("MEMORY", fmt_mem(c.memory.requested), fmt_mem(c.memory.available), fmt_mem(c.memory.capacity),
             fmt_pct(c.memory.utilization)),
            ("PODS", str(c.pods.in_use), str(c.pods.available), str(c.pods.capacity),
             fmt_pct(c.pods.utilization)),
        ]
        return render_table(headers, rows)

    def _emit(self, lines: List[str]) -> None:
        for line in lines:
            self.echo(line)

    def print_node_summary(self) -> None:
        self._emit(self.node_summary_lines())

    def print_namespace_summary(self) -> None:
        self._emit(self.namespace_summary_lines())

    def print_cluster_summary(self) -> None:
        self._emit(self.cluster_summary_lines())

    def to_json(self) -> str:
        return self.cluster.model_dump_json(indent=2)
