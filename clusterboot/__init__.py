"""
clusterboot - Kubernetes client for cluster bootstrap.

Drives node discovery, CSR approval and the temporary etcd non-HA override
against a cluster that is still coming up, using only the bootstrap
kubeconfig.
"""

from .config import ClientConfig, LoggingConfig, RetryConfig, get_config, set_config
from .exceptions import (
    ApprovalError,
    ClusterBootError,
    ConfigError,
    ExecutionError,
    NotFoundError,
    PatchError,
    QueryError,
)
from .k8s_client import K8sClient, K8sClientBuilder, NodeFilter, new_k8s_client
from .ops import LocalOps, Ops, RecordingOps

__all__ = [
    'K8sClient',
    'K8sClientBuilder',
    'new_k8s_client',
    'NodeFilter',
    'Ops',
    'LocalOps',
    'RecordingOps',
    'ClientConfig',
    'LoggingConfig',
    'RetryConfig',
    'get_config',
    'set_config',
    'ClusterBootError',
    'ConfigError',
    'QueryError',
    'NotFoundError',
    'ApprovalError',
    'PatchError',
    'ExecutionError',
]

__version__ = "0.1.0"
