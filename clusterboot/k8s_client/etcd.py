"""Temporary unsafe non-HA override of the etcd operator.

With fewer control plane nodes than a full quorum, the etcd operator refuses
to roll out. The override relaxes that until the remaining masters join and
must be reverted afterwards.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from ..exceptions import PatchError
from ..utils import api_status, retry_call
from .models import (
    ETCD_GROUP,
    ETCD_NAME,
    ETCD_PLURAL,
    ETCD_VERSION,
    MERGE_PATCH,
    UNSAFE_ETCD_PATCH,
    UNSAFE_ETCD_UNPATCH,
)

logger = logging.getLogger("clusterboot.k8s_client.etcd")


def _merge_patch_etcd(client, body: Dict[str, Any], stage: str) -> Dict[str, Any]:
    try:
        result = retry_call(
            client.retry,
            client.custom_api.patch_cluster_custom_object,
            group=ETCD_GROUP,
            version=ETCD_VERSION,
            plural=ETCD_PLURAL,
            name=ETCD_NAME,
            body=body,
            _content_type=MERGE_PATCH,
            description=f"{stage} etcd",
        )
    except Exception as e:
        logger.error(f"Failed to {stage} etcd: {e}")
        raise PatchError(stage, e, api_status(e)) from e
    logger.info(f"etcd {ETCD_NAME} {stage}ed, unsupportedConfigOverrides is now "
                f"{((result or {}).get('spec') or {}).get('unsupportedConfigOverrides')}")
    return result


def patch_etcd(client) -> Dict[str, Any]:
    """Turn on the unsafe non-HA override. Returns the patched resource."""
    logger.info("Patching etcd")
    return _merge_patch_etcd(client, UNSAFE_ETCD_PATCH, "patch")


def unpatch_etcd(client) -> Dict[str, Any]:
    """Remove the unsafe non-HA override. Returns the patched resource."""
    logger.info("UnPatching etcd")
    return _merge_patch_etcd(client, UNSAFE_ETCD_UNPATCH, "unpatch")


@contextmanager
def unsafe_etcd(client) -> Iterator[None]:
    """Keep the unsafe override on for the duration of the block.

    Example:
        with unsafe_etcd(client):
            wait_for_masters()
    """
    patch_etcd(client)
    try:
        yield
    except BaseException:
        try:
            unpatch_etcd(client)
        except PatchError as e:
            logger.error(f"Leaving etcd patched after failure: {e}")
        raise
    else:
        unpatch_etcd(client)
