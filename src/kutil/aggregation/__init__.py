from .aggregator import ResourceAggregator, AggregationStage, PodUsage, aggregate
from .merge import merge_node, merge_namespace, merge_resource_stat, merge_count_stat

__all__ = [
    "ResourceAggregator",
    "AggregationStage",
    "PodUsage",
    "aggregate",
    "merge_node",
    "merge_namespace",
    "merge_resource_stat",
    "merge_count_stat",
]
