"""Create, delete, restart and inspect the local kind cluster.

Each operation is a fixed sequence of docker/kind/kubectl calls. No state is
kept between calls: whether the cluster exists is always asked of kind.
"""

import typer

from devcluster.exceptions import (
    ClusterRestartError,
    DevClusterError,
    DockerUnavailableError,
)
from devcluster.logging_config import get_logger
from devcluster.models.cluster import ClusterConfig, ClusterPresence
from devcluster.output import console, print_success, print_warning
from devcluster.tools import Docker, Kind, Kubectl

logger = get_logger(__name__)


class ClusterLifecycle:
    """Lifecycle operations for one named kind cluster."""

    def __init__(self, config: ClusterConfig):
        """Initialize the lifecycle manager.

        Args:
            config: Cluster name, kind config path, port mappings and wait bound
        """
        self.config = config

    def check_docker(self) -> None:
        """Verify the Docker daemon answers before touching the cluster.

        Raises:
            DockerUnavailableError: If ``docker info`` fails
        """
        if not Docker.is_running():
            logger.error("Docker daemon is not reachable")
            raise DockerUnavailableError(
                "Start Docker Desktop or the docker service and try again"
            )
        print_success("Docker is running")

    def presence(self) -> ClusterPresence:
        """Ask kind whether the cluster exists."""
        if self.config.name in Kind.get_clusters():
            return ClusterPresence.PRESENT
        return ClusterPresence.ABSENT

    def create(self) -> None:
        """Create the cluster unless it already exists.

        Raises:
            KindError: If ``kind create cluster`` fails or the wait expires
            KubectlError: If the new context cannot be reached
        """
        name = self.config.name
        console.print(f"Creating kind cluster '{name}'...")

        if self.presence() is ClusterPresence.PRESENT:
            logger.info(f"Cluster {name} already exists, nothing to create")
            print_warning(f"Cluster '{name}' already exists")
            return

        logger.info(f"Creating cluster {name} (wait {self.config.wait_flag})")
        Kind.create_cluster(name, str(self.config.config_path), self.config.wait_flag)
        print_success("Cluster created successfully")

        Kubectl.cluster_info(self.config.kube_context, capture=False)
        print_success(f"kubectl configured to use {self.config.kube_context}")

    def delete(self) -> None:
        """Delete the cluster if it exists.

        Raises:
            KindError: If ``kind delete cluster`` fails
        """
        name = self.config.name
        console.print(f"Deleting kind cluster '{name}'...")

        if self.presence() is ClusterPresence.ABSENT:
            logger.info(f"Cluster {name} does not exist, nothing to delete")
            print_warning(f"Cluster '{name}' does not exist")
            return

        logger.info(f"Deleting cluster {name}")
        Kind.delete_cluster(name)
        print_success("Cluster deleted successfully")

    def restart(self) -> None:
        """Delete then create the cluster.

        Not atomic: if create fails the cluster stays deleted.

        Raises:
            ClusterRestartError: If create fails after the delete step
        """
        name = self.config.name
        console.print(f"Restarting kind cluster '{name}'...")
        self.delete()
        try:
            self.create()
        except DevClusterError as e:
            logger.error(f"Create failed during restart of {name}: {e.message}")
            raise ClusterRestartError(
                f"Restart failed after deleting cluster '{name}': {e.message}",
                "The cluster is no longer running. Run 'devcluster create' to recreate it.",
            ) from e

    def status(self) -> None:
        """Report whether the cluster exists and show its endpoints and nodes.

        The kubectl queries are informational only; their failures are ignored.
        """
        name = self.config.name
        context = self.config.kube_context

        if self.presence() is ClusterPresence.ABSENT:
            print_warning(f"Cluster '{name}' does not exist")
            console.print()
            console.print("Run 'devcluster create' to create a cluster")
            return

        print_success(f"Cluster '{name}' is running")
        console.print()
        console.print("Cluster info:")
        info = Kubectl.cluster_info(context)
        if info:
            typer.echo(info.rstrip())
        console.print()
        console.print("Nodes:")
        nodes = Kubectl.get_nodes(context)
        if nodes:
            typer.echo(nodes.rstrip())
