"""Merge rules for node and namespace accumulators.

Two field classes:

* additive (``requested``, ``limit``, pod ``in_use``) are summed with the
  existing value on every merge;
* replace-if-present (``available``, ``capacity``, ``utilization``,
  ``role``, ``taints``, ``schedulable``, ``status``) are written only
  when the incoming value is non-zero / non-empty, and then replace the
  existing value.

Every function returns a new record and leaves its arguments untouched.
"""

from typing import Optional

from kutil.models.utilization_models import CountStat, NamespaceRecord, NodeRecord, ResourceStat


def merge_resource_stat(existing: ResourceStat, delta: ResourceStat) -> ResourceStat:
    return ResourceStat(
        requested=existing.requested + delta.requested,
        limit=existing.limit + delta.limit,
        available=delta.available or existing.available,
        capacity=delta.capacity or existing.capacity,
        utilization=delta.utilization or existing.utilization,
    )


def merge_count_stat(existing: CountStat, delta: CountStat) -> CountStat:
    return CountStat(
        in_use=existing.in_use + delta.in_use,
        available=delta.available or existing.available,
        capacity=delta.capacity or existing.capacity,
        utilization=delta.utilization or existing.utilization,
    )


def merge_node(existing: Optional[NodeRecord], delta: NodeRecord) -> NodeRecord:
    """Fold ``delta`` into ``existing``; with no existing entry the delta is taken as-is."""
    if existing is None:
        return delta.model_copy(deep=True)

    return NodeRecord(
        name=existing.name,
        role=delta.role or existing.role,
        taints=delta.taints or existing.taints,
        schedulable=existing.schedulable if delta.schedulable is None else delta.schedulable,
        status=delta.status or existing.status,
        cpu=merge_resource_stat(existing.cpu, delta.cpu),
        memory=merge_resource_stat(existing.memory, delta.memory),
        pods=merge_count_stat(existing.pods, delta.pods),
    )


def merge_namespace(existing: Optional[NamespaceRecord], delta: NamespaceRecord) -> NamespaceRecord:
    """Fold ``delta`` into ``existing``; with no existing entry the delta is taken as-is."""
    if existing is None:
        return delta.model_copy(deep=True)

    return NamespaceRecord(
        name=existing.name,
        cpu=merge_resource_stat(existing.cpu, delta.cpu),
        memory=merge_resource_stat(existing.memory, delta.memory),
        pods=merge_count_stat(existing.pods, delta.pods),
    )
