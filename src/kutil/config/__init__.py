from .settings import Settings, KubernetesSettings, AggregationSettings, LogLevel

__all__ = ["Settings", "KubernetesSettings", "AggregationSettings", "LogLevel"]
