"""Wrappers around the docker, kind and kubectl command-line tools.

Every call is a single blocking subprocess invocation with no retries. Commands
that make changes (``kind create``/``kind delete``) stream their output straight
to the terminal so kind's own diagnostics reach the operator unchanged.
"""

import subprocess

from devcluster.exceptions import KindError, KubectlError, ToolNotFoundError
from devcluster.logging_config import get_logger

logger = get_logger(__name__)

INSTALL_HINTS = {
    "docker": "Install Docker from https://docs.docker.com/get-docker/",
    "kind": "Install kind from https://kind.sigs.k8s.io/docs/user/quick-start/#installation",
    "kubectl": "Install kubectl from https://kubernetes.io/docs/tasks/tools/",
}

# Printed by `kind get clusters` (on stderr in current releases) when nothing exists
NO_CLUSTERS_NOTICE = "No kind clusters found."


def run_tool(args: list[str], capture: bool = True) -> subprocess.CompletedProcess:
    """Run an external tool once and return the completed process.

    Args:
        args: Command line, first element is the binary
        capture: Capture stdout/stderr as text instead of inheriting the terminal

    Raises:
        ToolNotFoundError: If the binary is not on PATH
    """
    logger.debug(f"Running: {' '.join(args)}")
    try:
        if capture:
            result = subprocess.run(args, capture_output=True, text=True)
        else:
            result = subprocess.run(args)
    except FileNotFoundError:
        logger.error(f"{args[0]} binary not found in PATH")
        raise ToolNotFoundError(args[0], INSTALL_HINTS.get(args[0], "Check your PATH"))

    logger.debug(f"{args[0]} exited with return code {result.returncode}")
    return result


def parse_cluster_list(output: str) -> list[str]:
    """Parse ``kind get clusters`` output into cluster names.

    kind prints one name per line. Surrounding whitespace is stripped and blank
    lines and the "no clusters" notice are dropped, so callers compare whole
    names exactly rather than searching the raw text.
    """
    names = []
    for line in output.splitlines():
        name = line.strip()
        if not name or name == NO_CLUSTERS_NOTICE:
            continue
        names.append(name)
    return names


class Docker:
    """Queries against the local Docker daemon."""

    @staticmethod
    def is_running() -> bool:
        """Return True if ``docker info`` succeeds."""
        try:
            result = run_tool(["docker", "info"])
        except ToolNotFoundError:
            return False
        if result.returncode != 0:
            logger.debug(f"docker info failed: {result.stderr.strip()}")
            return False
        return True


class Kind:
    """kind cluster management commands."""

    @staticmethod
    def get_clusters() -> list[str]:
        """List the names of existing kind clusters.

        A failed listing, including a missing kind binary, reports no clusters.
        """
        try:
            result = run_tool(["kind", "get", "clusters"])
        except ToolNotFoundError as e:
            logger.warning(f"Cannot list kind clusters: {e.message}")
            return []
        if result.returncode != 0:
            logger.warning(f"kind get clusters failed: {result.stderr.strip()}")
            return []
        return parse_cluster_list(result.stdout)

    @staticmethod
    def create_cluster(name: str, config_path: str, wait: str) -> None:
        """Create a cluster and block until the control plane is ready.

        Raises:
            KindError: If kind exits non-zero, including when the wait expires
        """
        result = run_tool(
            [
                "kind",
                "create",
                "cluster",
                f"--name={name}",
                f"--config={config_path}",
                f"--wait={wait}",
            ],
            capture=False,
        )
        if result.returncode != 0:
            raise KindError(
                f"Failed to create kind cluster '{name}'",
                f"kind create cluster exited with code {result.returncode}. "
                "See the kind output above for the cause.",
            )

    @staticmethod
    def delete_cluster(name: str) -> None:
        """Delete a cluster by name.

        Raises:
            KindError: If kind exits non-zero
        """
        result = run_tool(["kind", "delete", "cluster", f"--name={name}"], capture=False)
        if result.returncode != 0:
            raise KindError(
                f"Failed to delete kind cluster '{name}'",
                f"kind delete cluster exited with code {result.returncode}",
            )


class Kubectl:
    """kubectl commands scoped to a single context."""

    @staticmethod
    def cluster_info(context: str, capture: bool = True) -> str | None:
        """Show control plane endpoints for ``context``.

        With ``capture`` the call is best-effort and returns the output, or None
        on any failure. Without it the output goes to the terminal and a failure
        raises KubectlError.
        """
        return Kubectl._run(["kubectl", "cluster-info", "--context", context], capture)

    @staticmethod
    def get_nodes(context: str, capture: bool = True) -> str | None:
        """List nodes for ``context``, with the same failure rules as cluster_info."""
        return Kubectl._run(["kubectl", "get", "nodes", "--context", context], capture)

    @staticmethod
    def _run(args: list[str], capture: bool) -> str | None:
        # Drop the trailing "--context <name>" for messages
        command = " ".join(args[:-2])
        if not capture:
            result = run_tool(args, capture=False)
            if result.returncode != 0:
                raise KubectlError(
                    f"'{command}' failed",
                    f"kubectl exited with code {result.returncode}",
                )
            return None

        try:
            result = run_tool(args)
        except ToolNotFoundError as e:
            logger.debug(f"Skipping {command}: {e.message}")
            return None
        if result.returncode != 0:
            logger.debug(f"{command} failed: {result.stderr.strip()}")
            return None
        return result.stdout
