"""Pytest configuration and shared fixtures."""

import logging
import subprocess

import pytest
from hypothesis import Verbosity, settings

# Configure Hypothesis for property-based testing
settings.register_profile("default", max_examples=100, verbosity=Verbosity.normal)
settings.register_profile("ci", max_examples=1000, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=10, verbosity=Verbosity.verbose)

# Load the default profile
settings.load_profile("default")

CLUSTER_INFO_OUTPUT = "Kubernetes control plane is running at https://127.0.0.1:41234\n"
NODES_OUTPUT = (
    "NAME                          STATUS   ROLES           AGE   VERSION\n"
    "blueprint-dev-control-plane   Ready    control-plane   2m    v1.31.0\n"
)


class FakeTools:
    """Stand-in for subprocess.run that emulates docker, kind and kubectl.

    Tracks kind clusters in memory and records every command line it receives.
    """

    def __init__(self):
        self.clusters: list[str] = []
        self.docker_running = True
        # "<binary> <first arg>" pairs that exit 1, e.g. "kind create"
        self.failing: set[str] = set()
        self.missing: set[str] = set()
        self.calls: list[list[str]] = []

    def __call__(self, args, **kwargs):
        args = list(args)
        self.calls.append(args)

        if args[0] in self.missing:
            raise FileNotFoundError(args[0])

        if args[:2] == ["docker", "info"]:
            if self.docker_running:
                return self._result(args, 0, "Server Version: 27.0.1\n")
            return self._result(args, 1, stderr="Cannot connect to the Docker daemon")

        if " ".join(args[:2]) in self.failing:
            return self._result(args, 1, stderr=f"{args[0]} failed")

        if args[:3] == ["kind", "get", "clusters"]:
            return self._result(args, 0, "".join(f"{c}\n" for c in self.clusters))
        if args[:3] == ["kind", "create", "cluster"]:
            self.clusters.append(self._flag(args, "--name"))
        elif args[:3] == ["kind", "delete", "cluster"]:
            self.clusters.remove(self._flag(args, "--name"))
        elif args[:2] == ["kubectl", "cluster-info"]:
            return self._result(args, 0, CLUSTER_INFO_OUTPUT)
        elif args[:3] == ["kubectl", "get", "nodes"]:
            return self._result(args, 0, NODES_OUTPUT)
        return self._result(args, 0)

    def commands(self, *prefix: str) -> list[list[str]]:
        """Recorded calls whose command line starts with ``prefix``."""
        return [c for c in self.calls if c[: len(prefix)] == list(prefix)]

    @staticmethod
    def _flag(args: list[str], name: str) -> str:
        return next(a.split("=", 1)[1] for a in args if a.startswith(f"{name}="))

    @staticmethod
    def _result(args, returncode, stdout="", stderr=""):
        return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def fake_tools(monkeypatch, tmp_path):
    """Route subprocess.run through FakeTools and work in an empty directory."""
    tools = FakeTools()
    monkeypatch.setattr(subprocess, "run", tools)
    monkeypatch.chdir(tmp_path)
    return tools


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers setup_logging attached to the root logger during a test."""
    yield
    logging.getLogger().handlers.clear()
