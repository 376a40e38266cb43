"""Tests for display formatting and summary tables."""

from __future__ import annotations

import json

import pytest

from kutil.aggregation.aggregator import aggregate
from kutil.reporting.formatting import fmt_cpu, fmt_mem, fmt_mib, fmt_milli, fmt_pct
from kutil.reporting.presenter import ReportPresenter, render_table


class TestFormatting:
    """Millicore and byte display strings."""

    @pytest.mark.parametrize(
        ("millicores", "expected"),
        [(2000, "2 vCPU"), (1500, "1.5 vCPU"), (0, "0 vCPU"), (12250, "12.2 vCPU")],
    )
    def test_fmt_cpu(self, millicores: int, expected: str) -> None:
        assert fmt_cpu(millicores) == expected

    def test_fmt_milli(self) -> None:
        assert fmt_milli(250) == "250m"

    @pytest.mark.parametrize(
        ("num_bytes", "expected"),
        [
            (8 * 1024**3, "8 GiB"),
            (int(1.5 * 1024**3), "1.5 GiB"),
            (512 * 1024**2, "512 MiB"),
            (2 * 1024**4, "2 TiB"),
        ],
    )
    def test_fmt_mem(self, num_bytes: int, expected: str) -> None:
        assert fmt_mem(num_bytes) == expected

    def test_fmt_mib(self) -> None:
        assert fmt_mib(300 * 1024**2) == "300 MiB"

    def test_fmt_pct(self) -> None:
        assert fmt_pct(150) == "150%"


class TestRenderTable:
    """Column alignment."""

    def test_columns_sized_to_widest_cell(self) -> None:
        lines = render_table(("A", "B"), [("long-value", "x"), ("y", "z")])
        assert lines == ["A           B", "long-value  x", "y           z"]


class TestReportPresenter:
    """Summary tables from a finished ClusterRecord."""

    @pytest.fixture
    def presenter(self, node_factory, pod_factory, container_factory) -> ReportPresenter:
        cluster = aggregate(
            [
                node_factory("worker-b", cpu="2", memory="8Gi", pods="100",
                             labels={"node-role.kubernetes.io/worker": ""}),
                node_factory("worker-a", cpu="2", memory="8Gi", pods="100"),
            ],
            [
                pod_factory("web", "worker-a", [container_factory("app", cpu_request="500m", memory_request="1Gi")]),
                pod_factory("db", "worker-b", [container_factory("pg", cpu_request="1", memory_request="2Gi")]),
            ],
        )
        return ReportPresenter(cluster)

    def test_node_summary_sorted(self, presenter: ReportPresenter) -> None:
        lines = presenter.node_summary_lines()
        assert lines[0].split() == ["NODE", "STATUS", "ROLE", "TAINTS", "CPU", "REQ", "MEM", "REQ", "PODS"]
        assert lines[1].split() == ["worker-a", "Ready", "25%", "12%", "1%"]
        assert lines[2].split() == ["worker-b", "Ready", "worker", "50%", "25%", "1%"]

    def test_namespace_summary(self, presenter: ReportPresenter) -> None:
        lines = presenter.namespace_summary_lines()
        assert lines[1].split() == ["db", "1000m", "25%", "2048", "MiB", "12%", "1", "0%"]
        assert lines[2].split() == ["web", "500m", "12%", "1024", "MiB", "6%", "1", "0%"]

    def test_cluster_summary(self, presenter: ReportPresenter) -> None:
        lines = presenter.cluster_summary_lines()
        assert lines[1].split() == ["CPU", "1.5", "vCPU", "4", "vCPU", "4", "vCPU", "37%"]
        assert lines[2].split() == ["MEMORY", "3", "GiB", "16", "GiB", "16", "GiB", "18%"]
        assert lines[3].split() == ["PODS", "2", "200", "200", "1%"]

    def test_cluster_memory_below_one_gib(self, node_factory, pod_factory, container_factory) -> None:
        cluster = aggregate(
            [node_factory("n1", memory="768Mi")],
            [pod_factory("web", "n1", [container_factory("app", memory_request="256Mi")])],
        )
        lines = ReportPresenter(cluster).cluster_summary_lines()
        assert lines[2].split() == ["MEMORY", "256", "MiB", "768", "MiB", "768", "MiB", "33%"]

    def test_print_uses_echo(self, node_factory, pod_factory, container_factory) -> None:
        cluster = aggregate(
            [node_factory("n1")],
            [pod_factory("web", "n1", [container_factory("app")])],
        )
        captured: list[str] = []
        ReportPresenter(cluster, echo=captured.append).print_cluster_summary()
        assert captured[0].startswith("CLUSTER RESOURCES")
        assert len(captured) == 4

    def test_to_json(self, presenter: ReportPresenter) -> None:
        data = json.loads(presenter.to_json())
        assert data["cpu"]["requested"] == 1500
        assert data["nodes"]["worker-a"]["pods"]["in_use"] == 1
        assert set(data["namespaces"]) == {"web", "db"}
