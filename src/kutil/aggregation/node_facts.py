"""Derived node facts: role, taint summary, schedulability and ready conditions."""

from typing import Iterable, Mapping

from kutil.models.inventory_models import NodeCondition, Taint

ROLE_LABEL_PREFIX = "node-role.kubernetes.io/"
TAINT_KEY_PREFIXES = ("node-role.kubernetes.io/", "node.kubernetes.io/")
BLOCKING_TAINT_EFFECTS = ("NoSchedule", "NoExecute")


def derive_role(labels: Mapping[str, str]) -> str:
    """Comma-joined role names taken from ``node-role.kubernetes.io/<role>`` label keys."""
    return ",".join(
        key[len(ROLE_LABEL_PREFIX):]
        for key in labels
        if key.startswith(ROLE_LABEL_PREFIX)
    )


def render_taint(taint: Taint) -> str:
    """``suffix:effect`` for a well-known taint key, bare ``effect`` for ``master``."""
    suffix = taint.key.split("/", 1)[1]
    if suffix == "master":
        return taint.effect
    return f"{suffix}:{taint.effect}"


def derive_taints(taints: Iterable[Taint]) -> str:
    return ",".join(
        render_taint(taint)
        for taint in taints
        if taint.key.startswith(TAINT_KEY_PREFIXES)
    )


def is_schedulable(taints: Iterable[Taint]) -> bool:
    """False as soon as any taint keeps new workloads off the node."""
    return not any(taint.effect in BLOCKING_TAINT_EFFECTS for taint in taints)


def derive_ready_conditions(conditions: Iterable[NodeCondition]) -> str:
    return ",".join(condition.type for condition in conditions if condition.status == "True")
