"""Node and config map queries."""

import logging

from kubernetes.client import V1ConfigMap, V1NodeList
from kubernetes.client.rest import ApiException

from ..exceptions import NotFoundError, QueryError
from ..utils import api_status, retry_call
from .models import MASTER_ROLE_LABEL, NodeFilter

logger = logging.getLogger("clusterboot.k8s_client.nodes")


def list_nodes(client, node_filter: NodeFilter = NodeFilter.ALL) -> V1NodeList:
    """List cluster nodes.

    Args:
        client: K8sClient instance
        node_filter: NodeFilter.MASTERS restricts the list to control plane nodes

    Returns:
        V1NodeList: Nodes as currently reported by the API server

    Raises:
        QueryError: If the API server rejected or did not answer the request
    """
    kwargs = {}
    if NodeFilter(node_filter) is NodeFilter.MASTERS:
        kwargs['label_selector'] = MASTER_ROLE_LABEL

    try:
        return retry_call(client.retry, client.core_api.list_node,
                          description="list nodes", **kwargs)
    except Exception as e:
        operation = "list master nodes" if kwargs else "list nodes"
        logger.error(f"Failed to {operation}: {e}")
        raise QueryError(operation, e, api_status(e)) from e


def get_config_map(client, namespace: str, name: str) -> V1ConfigMap:
    """Fetch a config map, raising NotFoundError when it does not exist."""
    operation = f"get configmap {namespace}/{name}"
    try:
        return retry_call(client.retry, client.core_api.read_namespaced_config_map,
                          name=name, namespace=namespace, description=operation)
    except ApiException as e:
        if e.status == 404:
            raise NotFoundError(operation, e, 404) from e
        logger.error(f"Failed to {operation}: {e}")
        raise QueryError(operation, e, e.status) from e
    except Exception as e:
        logger.error(f"Failed to {operation}: {e}")
        raise QueryError(operation, e) from e
