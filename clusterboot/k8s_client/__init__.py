"""Bootstrap Kubernetes client.

Operations used while a cluster is still converging:

- nodes: list all or master nodes, read config maps
- pods: list pods by label, read pod logs
- csr: list and approve certificate signing requests
- etcd: apply and revert the unsafe non-HA etcd override
- admin: run the administration CLI on the host with the bootstrap kubeconfig
"""

from .core import K8sClient, K8sClientBuilder, new_k8s_client
from .csr import is_csr_pending, pending_csrs
from .models import NodeFilter, MASTER_ROLE_LABEL, UNSAFE_ETCD_PATCH, UNSAFE_ETCD_UNPATCH
from .pods import label_selector

__all__ = [
    'K8sClient',
    'K8sClientBuilder',
    'new_k8s_client',
    'NodeFilter',
    'MASTER_ROLE_LABEL',
    'UNSAFE_ETCD_PATCH',
    'UNSAFE_ETCD_UNPATCH',
    'is_csr_pending',
    'pending_csrs',
    'label_selector',
]
