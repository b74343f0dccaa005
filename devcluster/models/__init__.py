"""Data models for the development cluster configuration and state."""

from devcluster.models.cluster import ClusterConfig, ClusterPresence, PortMapping

__all__ = [
    "ClusterConfig",
    "ClusterPresence",
    "PortMapping",
]
