"""Tests for the kutil command line."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from kutil import cli
from kutil.aggregation.aggregator import aggregate
from kutil.core.exceptions import ClientConnectionException, EmptyInventoryException, InventoryException


class FakeOrchestrator:
    """Replaces UtilizationReportOrchestrator; records the config it was given."""

    configs: list[dict] = []
    result = None
    error: Exception | None = None

    def __init__(self, config):
        FakeOrchestrator.configs.append(config)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def run_report(self):
        if FakeOrchestrator.error is not None:
            raise FakeOrchestrator.error
        return FakeOrchestrator.result


@pytest.fixture
def fake_orchestrator(monkeypatch, node_factory, pod_factory, container_factory):
    for var in ("K8S_KUBECONFIG_PATH", "K8S_CONTEXT", "AGGREGATION_LEGACY_NODE_MEMORY_LIMIT"):
        monkeypatch.delenv(var, raising=False)
    FakeOrchestrator.configs = []
    FakeOrchestrator.error = None
    FakeOrchestrator.result = aggregate(
        [node_factory("worker-1", cpu="2", memory="8Gi", pods="110")],
        [pod_factory("web", "worker-1", [container_factory("app", cpu_request="500m", memory_request="1Gi")])],
    )
    monkeypatch.setattr(cli, "UtilizationReportOrchestrator", FakeOrchestrator)
    return FakeOrchestrator


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCli:
    """View selection, output formats and error exits."""

    def test_default_shows_nodes_and_cluster(self, runner: CliRunner, fake_orchestrator) -> None:
        result = runner.invoke(cli.main, [])
        assert result.exit_code == 0
        assert "NODE" in result.output
        assert "CLUSTER RESOURCES" in result.output
        assert "NAMESPACE" not in result.output

    def test_namespaces_only(self, runner: CliRunner, fake_orchestrator) -> None:
        result = runner.invoke(cli.main, ["--namespaces"])
        assert result.exit_code == 0
        assert result.output.splitlines()[0].startswith("NAMESPACE")
        assert "CLUSTER RESOURCES" not in result.output

    def test_all_views(self, runner: CliRunner, fake_orchestrator) -> None:
        result = runner.invoke(cli.main, ["--namespaces", "--nodes", "--cluster"])
        assert result.exit_code == 0
        for header in ("NAMESPACE", "NODE", "CLUSTER RESOURCES"):
            assert header in result.output

    def test_json_output(self, runner: CliRunner, fake_orchestrator) -> None:
        result = runner.invoke(cli.main, ["--output", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["cpu"]["utilization"] == 25

    def test_flags_override_settings(self, runner: CliRunner, fake_orchestrator) -> None:
        result = runner.invoke(cli.main, [
            "--kubeconfig", "/tmp/kubeconfig", "--context", "staging", "--legacy-node-memory-limit",
        ])
        assert result.exit_code == 0
        config = fake_orchestrator.configs[-1]
        assert config["kubernetes"]["kubeconfig_path"] == "/tmp/kubeconfig"
        assert config["kubernetes"]["context"] == "staging"
        assert config["aggregation"]["legacy_node_memory_limit"] is True

    def test_settings_from_environment(self, runner: CliRunner, fake_orchestrator, monkeypatch) -> None:
        monkeypatch.setenv("K8S_CONTEXT", "prod")
        result = runner.invoke(cli.main, [])
        assert result.exit_code == 0
        config = fake_orchestrator.configs[-1]
        assert config["kubernetes"]["context"] == "prod"
        assert config["aggregation"]["legacy_node_memory_limit"] is False

    def test_empty_inventory_exits_with_error(self, runner: CliRunner, fake_orchestrator) -> None:
        fake_orchestrator.error = EmptyInventoryException("nodes")
        result = runner.invoke(cli.main, [])
        assert result.exit_code == 1
        assert "Error: No nodes discovered" in result.output

    def test_connection_failure_exits_with_error(self, runner: CliRunner, fake_orchestrator) -> None:
        fake_orchestrator.error = ClientConnectionException("Kubernetes", "Could not load kubeconfig")
        result = runner.invoke(cli.main, [])
        assert result.exit_code == 1
        assert "Kubernetes connection failed" in result.output

    def test_api_unreachable_exits_with_error(self, runner: CliRunner, fake_orchestrator) -> None:
        fake_orchestrator.error = InventoryException("nodes", "There was a problem connecting with the API")
        result = runner.invoke(cli.main, [])
        assert result.exit_code == 1
        assert "Error: There was a problem connecting with the API" in result.output

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli.main, ["--version"])
        assert result.exit_code == 0
        assert "kutil version 0.9.0" in result.output
        assert "Copyright (C) 2020 Jed Record" in result.output
