"""Bootstrap Kubernetes client.

This module contains the K8sClient facade. It owns the API connection built
from the bootstrap kubeconfig and delegates each operation to the focused
modules of this package (nodes, pods, csr, etcd, admin).
"""

import logging
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional

from kubernetes import client as k8s
from kubernetes.client import (
    V1CertificateSigningRequest,
    V1CertificateSigningRequestList,
    V1ConfigMap,
    V1NodeList,
    V1Pod,
)

from ..config import RetryConfig, get_config
from ..exceptions import ConfigError
from ..ops import Ops
from ..utils.kube import kubeconfig_file, load_api_client
from . import admin, csr, etcd, nodes, pods
from .models import NodeFilter

logger = logging.getLogger("clusterboot.k8s_client.core")


class K8sClient:
    """Client used by the bootstrap flow to talk to a converging cluster.

    Instances are only produced by :meth:`connect` (or built directly from
    ready API objects in tests); a failed connect never yields an instance.
    Nothing is cached, every call goes to the API server.
    """

    def __init__(
        self,
        api_client: k8s.ApiClient,
        core_api: k8s.CoreV1Api,
        custom_api: k8s.CustomObjectsApi,
        csr_api: k8s.CertificatesV1Api,
        log: Optional[logging.Logger] = None,
        retry: Optional[RetryConfig] = None,
        admin_command: Optional[str] = None,
    ):
        self._api_client = api_client
        self._core_api = core_api
        self._custom_api = custom_api
        self._csr_api = csr_api
        self._log = log or logger
        self._retry = retry if retry is not None else RetryConfig(max_retries=0)
        self._admin_command = admin_command or get_config().admin_command

    @classmethod
    def connect(
        cls,
        config_path: Optional[str] = None,
        log: Optional[logging.Logger] = None,
        retry: Optional[RetryConfig] = None,
    ) -> "K8sClient":
        """Connect to the API server described by a kubeconfig.

        Args:
            config_path: Path to the kubeconfig; defaults to the configured one
            log: Logger for client messages
            retry: Retry policy for API calls; defaults to the configured one

        Returns:
            K8sClient: A fully initialized client

        Raises:
            ConfigError: If the kubeconfig cannot be loaded or a client cannot be created
        """
        try:
            with kubeconfig_file(config_path) as path:
                api_client = load_api_client(path)
        except Exception as e:
            logger.error(f"Failed loading kubeconfig {config_path or ''}: {e}")
            raise ConfigError("loading kubeconfig", e) from e

        try:
            core_api = k8s.CoreV1Api(api_client)
        except Exception as e:
            raise ConfigError("creating a Kubernetes client", e) from e
        try:
            custom_api = k8s.CustomObjectsApi(api_client)
        except Exception as e:
            raise ConfigError("creating an operator client", e) from e
        try:
            csr_api = k8s.CertificatesV1Api(api_client)
        except Exception as e:
            raise ConfigError("creating a CSR client", e) from e

        config = get_config()
        client = cls(
            api_client,
            core_api,
            custom_api,
            csr_api,
            log=log,
            retry=retry if retry is not None else config.retry,
            admin_command=config.admin_command,
        )
        logger.info(f"Connected to {api_client.configuration.host}")
        return client

    @property
    def core_api(self) -> k8s.CoreV1Api:
        return self._core_api

    @property
    def custom_api(self) -> k8s.CustomObjectsApi:
        return self._custom_api

    @property
    def csr_api(self) -> k8s.CertificatesV1Api:
        return self._csr_api

    @property
    def log(self) -> logging.Logger:
        return self._log

    @property
    def retry(self) -> RetryConfig:
        return self._retry

    @property
    def admin_command(self) -> str:
        return self._admin_command

    def close(self) -> None:
        """Release pooled HTTP connections."""
        self._api_client.close()

    def __enter__(self) -> "K8sClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # Nodes and pods

    def list_nodes(self, node_filter: NodeFilter = NodeFilter.ALL) -> V1NodeList:
        return nodes.list_nodes(self, node_filter)

    def list_master_nodes(self) -> V1NodeList:
        return nodes.list_nodes(self, NodeFilter.MASTERS)

    def get_config_map(self, namespace: str, name: str) -> V1ConfigMap:
        return nodes.get_config_map(self, namespace, name)

    def get_pods(self, namespace: str, label_match: Optional[Dict[str, str]] = None) -> List[V1Pod]:
        return pods.get_pods(self, namespace, label_match)

    def get_pod_logs(self, namespace: str, pod_name: str, since_seconds: Optional[int] = 0) -> str:
        return pods.get_pod_logs(self, namespace, pod_name, since_seconds)

    # CSRs

    def list_csrs(self) -> V1CertificateSigningRequestList:
        return csr.list_csrs(self)

    def approve_csr(self, request: V1CertificateSigningRequest) -> None:
        csr.approve_csr(self, request)

    # etcd

    def patch_etcd(self) -> Dict:
        return etcd.patch_etcd(self)

    def unpatch_etcd(self) -> Dict:
        return etcd.unpatch_etcd(self)

    @contextmanager
    def unsafe_etcd(self) -> Iterator[None]:
        with etcd.unsafe_etcd(self):
            yield

    # Admin CLI

    def run_oc_command(self, args: List[str], kubeconfig_path: str, ops: Ops) -> str:
        return admin.run_oc_command(self, args, kubeconfig_path, ops)


K8sClientBuilder = Callable[[Optional[str], Optional[logging.Logger]], K8sClient]


def new_k8s_client(config_path: Optional[str] = None, log: Optional[logging.Logger] = None) -> K8sClient:
    """Default K8sClientBuilder."""
    return K8sClient.connect(config_path, log)
