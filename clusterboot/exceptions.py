"""Exception types raised by the clusterboot package."""
from typing import Any, Dict, Optional


class ClusterBootError(Exception):
    """Base class for all bootstrap client errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(ClusterBootError):
    """Kubeconfig could not be loaded or a client could not be created."""

    def __init__(self, stage: str, cause: Optional[BaseException] = None) -> None:
        message = stage if cause is None else f"{stage}: {cause}"
        super().__init__(message, {"stage": stage})
        self.stage = stage


class QueryError(ClusterBootError):
    """A read against the API server failed."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None,
                 status: Optional[int] = None) -> None:
        message = f"Failed to {operation}" if cause is None else f"Failed to {operation}: {cause}"
        super().__init__(message, {"operation": operation, "status": status})
        self.operation = operation
        self.status = status


class NotFoundError(QueryError):
    """The requested object does not exist."""


class ApprovalError(ClusterBootError):
    """The approval subresource update for a CSR was rejected."""

    def __init__(self, csr: Any, cause: Optional[BaseException] = None,
                 status: Optional[int] = None) -> None:
        name = getattr(getattr(csr, "metadata", None), "name", None)
        super().__init__(f"Failed to approve csr {name}: {cause}", {"csr": name, "status": status})
        self.csr = csr
        self.status = status

    @property
    def is_conflict(self) -> bool:
        """True when the server rejected a stale resourceVersion."""
        return self.status == 409


class PatchError(ClusterBootError):
    """Applying or reverting the etcd unsafe override failed."""

    def __init__(self, stage: str, cause: Optional[BaseException] = None,
                 status: Optional[int] = None) -> None:
        super().__init__(f"Failed to {stage} etcd: {cause}", {"stage": stage, "status": status})
        self.stage = stage
        self.status = status


class ExecutionError(ClusterBootError):
    """A host command failed to start or exited non-zero."""

    def __init__(self, command: str, returncode: Optional[int] = None, output: str = "",
                 cause: Optional[BaseException] = None) -> None:
        if cause is not None:
            message = f"Failed to execute {command}: {cause}"
        else:
            message = f"{command} exited with code {returncode}: {output.strip()}"
        super().__init__(message, {"command": command, "returncode": returncode})
        self.command = command
        self.returncode = returncode
        self.output = output
