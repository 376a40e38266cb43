"""kutil - Kubernetes cluster utilization snapshot."""

__version__ = "0.9.0"
