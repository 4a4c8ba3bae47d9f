"""Pod listing and log retrieval."""

import io
import logging
from typing import Dict, List, Optional

from kubernetes.client import V1Pod

from ..exceptions import QueryError
from ..utils import api_status, retry_call

logger = logging.getLogger("clusterboot.k8s_client.pods")

LOG_CHUNK_SIZE = 64 * 1024


def label_selector(label_match: Dict[str, str]) -> str:
    """Render a label mapping as an equality selector, e.g. ``app=etcd,k8s-app=etcd``."""
    return ",".join(f"{key}={value}" for key, value in label_match.items())


def get_pods(client, namespace: str, label_match: Optional[Dict[str, str]] = None) -> List[V1Pod]:
    """List pods in a namespace.

    Args:
        client: K8sClient instance
        namespace: Namespace to list
        label_match: Labels every returned pod must carry; None lists all pods

    Returns:
        list: V1Pod items in the order the API server returned them
    """
    kwargs = {}
    if label_match is not None:
        kwargs['label_selector'] = label_selector(label_match)

    operation = f"list pods in {namespace}"
    try:
        pods = retry_call(client.retry, client.core_api.list_namespaced_pod,
                          namespace, description=operation, **kwargs)
    except Exception as e:
        logger.error(f"Failed to {operation}: {e}")
        raise QueryError(operation, e, api_status(e)) from e
    return pods.items


def get_pod_logs(client, namespace: str, pod_name: str, since_seconds: Optional[int] = 0) -> str:
    """Read the logs of a pod.

    The log stream is drained completely into memory and released before
    returning. Nothing is returned when reading fails part way.

    Args:
        client: K8sClient instance
        namespace: Namespace of the pod
        pod_name: Name of the pod
        since_seconds: Only return logs newer than this many seconds; values <= 0 mean no limit

    Returns:
        str: The pod logs
    """
    kwargs = {}
    seconds = int(since_seconds or 0)
    if seconds > 0:
        kwargs['since_seconds'] = seconds

    operation = f"get logs of pod {namespace}/{pod_name}"
    try:
        response = retry_call(client.retry, client.core_api.read_namespaced_pod_log,
                              name=pod_name, namespace=namespace, _preload_content=False,
                              description=operation, **kwargs)
    except Exception as e:
        logger.error(f"Failed to {operation}: {e}")
        raise QueryError(operation, e, api_status(e)) from e

    buf = io.BytesIO()
    try:
        for chunk in response.stream(LOG_CHUNK_SIZE):
            buf.write(chunk)
    except Exception as e:
        logger.error(f"Failed to read logs of pod {namespace}/{pod_name}: {e}")
        raise QueryError(operation, e) from e
    finally:
        response.close()
        response.release_conn()

    return buf.getvalue().decode('utf-8', errors='replace')
