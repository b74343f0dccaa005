"""Custom exceptions for devcluster."""


class DevClusterError(Exception):
    """Base exception for all devcluster errors."""

    def __init__(self, message: str, details: str | None = None):
        """Initialize the exception.

        Args:
            message: Main error message
            details: Additional details or suggestions
        """
        self.message = message
        self.details = details
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the complete error message.

        Returns:
            Formatted error message with details
        """
        if self.details:
            return f"{self.message}\n\nDetails: {self.details}"
        return self.message


class DockerUnavailableError(DevClusterError):
    """Raised when the Docker daemon does not answer ``docker info``."""

    def __init__(self, details: str | None = None):
        super().__init__("Docker is not running. Please ensure Docker is started.", details)


class ToolNotFoundError(DevClusterError):
    """Raised when a required binary is missing from PATH."""

    def __init__(self, tool: str, install_hint: str):
        self.tool = tool
        super().__init__(f"'{tool}' is not installed or not in PATH", install_hint)


class KindError(DevClusterError):
    """Exception raised when a kind command fails."""

    pass


class KubectlError(DevClusterError):
    """Exception raised when a fatal kubectl command fails."""

    pass


class ClusterRestartError(DevClusterError):
    """Raised when create fails after restart already deleted the cluster."""

    pass
