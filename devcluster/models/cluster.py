"""Data models for the kind cluster configuration and state."""

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CLUSTER_NAME = "blueprint-dev"
DEFAULT_CONFIG_PATH = Path(".devcontainer/kind-config.yaml")
DEFAULT_WAIT_SECONDS = 300


class ClusterPresence(str, Enum):
    """Whether the named cluster currently exists in the container runtime."""

    ABSENT = "absent"
    PRESENT = "present"


class PortMapping(BaseModel):
    """Host port forwarded into the control-plane container."""

    model_config = ConfigDict(frozen=True)

    host_port: int
    container_port: int
    protocol: str = "TCP"

    @field_validator("host_port", "container_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in the TCP/UDP range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {v}")
        return v

    @field_validator("protocol")
    @classmethod
    def validate_protocol(cls, v: str) -> str:
        """Validate protocol is one kind accepts."""
        allowed = ["TCP", "UDP", "SCTP"]
        if v not in allowed:
            raise ValueError(f"protocol must be one of {allowed}, got '{v}'")
        return v

    def __str__(self) -> str:
        return f"{self.host_port}->{self.container_port}"


def default_port_mappings() -> list[PortMapping]:
    """HTTP on localhost:8080 and HTTPS on localhost:8443."""
    return [
        PortMapping(host_port=8080, container_port=80),
        PortMapping(host_port=8443, container_port=443),
    ]


class ClusterConfig(BaseModel):
    """Configuration of the development cluster.

    Built once at startup and handed to every lifecycle operation.
    """

    model_config = ConfigDict(frozen=True)

    name: str = DEFAULT_CLUSTER_NAME
    config_path: Path = DEFAULT_CONFIG_PATH
    port_mappings: list[PortMapping] = Field(default_factory=default_port_mappings)
    wait_seconds: int = DEFAULT_WAIT_SECONDS

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate the name is usable as a kind cluster and container name."""
        if not v:
            raise ValueError("name cannot be empty")
        if len(v) > 63:
            raise ValueError("name cannot exceed 63 characters")
        if not re.fullmatch(r"[a-z0-9]([-a-z0-9]*[a-z0-9])?", v):
            raise ValueError(
                f"name '{v}' must contain only lowercase alphanumeric characters and "
                "hyphens, and cannot start or end with a hyphen"
            )
        return v

    @field_validator("port_mappings")
    @classmethod
    def validate_port_mappings(cls, v: list[PortMapping]) -> list[PortMapping]:
        """Validate no host port is mapped twice."""
        host_ports = [m.host_port for m in v]
        duplicates = sorted({p for p in host_ports if host_ports.count(p) > 1})
        if duplicates:
            raise ValueError(f"host ports mapped more than once: {duplicates}")
        return v

    @field_validator("wait_seconds")
    @classmethod
    def validate_wait_seconds(cls, v: int) -> int:
        """Validate the control-plane wait bound is positive."""
        if v <= 0:
            raise ValueError("wait_seconds must be positive")
        return v

    @property
    def kube_context(self) -> str:
        """kubeconfig context kind registers for this cluster."""
        return f"kind-{self.name}"

    @property
    def wait_flag(self) -> str:
        """The wait bound as a kind ``--wait`` duration."""
        if self.wait_seconds % 60 == 0:
            return f"{self.wait_seconds // 60}m"
        return f"{self.wait_seconds}s"
