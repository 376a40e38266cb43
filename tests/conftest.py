"""Shared fixtures: builders for node and pod inventory."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from kutil.models.inventory_models import (
    ContainerSpec,
    ContainerStatus,
    NodeCondition,
    NodeInventory,
    PodInventory,
    Taint,
)


def build_node(
    name: str,
    cpu: str = "2",
    memory: str = "8Gi",
    pods: str = "110",
    capacity: dict[str, str] | None = None,
    labels: dict[str, str] | None = None,
    taints: list[tuple[str, str]] | None = None,
    conditions: dict[str, str] | None = None,
) -> NodeInventory:
    """Node whose capacity equals its allocatable unless given."""
    allocatable = {"cpu": cpu, "memory": memory, "pods": pods}
    return NodeInventory(
        name=name,
        labels=labels or {},
        taints=[Taint(key=key, effect=effect) for key, effect in (taints or [])],
        conditions=[
            NodeCondition(type=cond_type, status=status)
            for cond_type, status in (conditions or {"Ready": "True"}).items()
        ],
        allocatable=allocatable,
        capacity=capacity or dict(allocatable),
    )


def build_container(
    name: str,
    cpu_request: str | None = None,
    cpu_limit: str | None = None,
    memory_request: str | None = None,
    memory_limit: str | None = None,
) -> ContainerSpec:
    requests: dict[str, Any] = {}
    limits: dict[str, Any] = {}
    if cpu_request is not None:
        requests["cpu"] = cpu_request
    if memory_request is not None:
        requests["memory"] = memory_request
    if cpu_limit is not None:
        limits["cpu"] = cpu_limit
    if memory_limit is not None:
        limits["memory"] = memory_limit
    return ContainerSpec(name=name, requests=requests, limits=limits)


def build_pod(
    namespace: str,
    node_name: str | None,
    containers: list[ContainerSpec],
    ready: dict[str, bool] | None = None,
    name: str = "pod",
) -> PodInventory:
    """Pod whose containers are all ready unless ``ready`` says otherwise."""
    ready = ready if ready is not None else {c.name: True for c in containers}
    return PodInventory(
        name=name,
        namespace=namespace,
        node_name=node_name,
        containers=containers,
        container_statuses=[ContainerStatus(name=n, ready=r) for n, r in ready.items()],
    )


@pytest.fixture
def node_factory() -> Callable[..., NodeInventory]:
    return build_node


@pytest.fixture
def container_factory() -> Callable[..., ContainerSpec]:
    return build_container


@pytest.fixture
def pod_factory() -> Callable[..., PodInventory]:
    return build_pod
