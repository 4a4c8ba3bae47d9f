"""Certificate signing request listing and approval.

Kubelets of joining nodes file CSRs for their client and serving
certificates. During bootstrap nothing approves them automatically, so the
orchestrator lists them, picks the pending ones and approves each through
the approval subresource.
"""

import copy
import logging
from typing import Iterable, List

from kubernetes.client import (
    V1CertificateSigningRequest,
    V1CertificateSigningRequestList,
    V1CertificateSigningRequestStatus,
)

from ..exceptions import ApprovalError, QueryError
from ..utils import api_status, retry_call
from .models import CSR_APPROVED, CSR_DENIED, CSR_FAILED, approval_condition

logger = logging.getLogger("clusterboot.k8s_client.csr")


def list_csrs(client) -> V1CertificateSigningRequestList:
    """List every CSR visible to the bootstrap credential, pending or not."""
    try:
        return retry_call(client.retry, client.csr_api.list_certificate_signing_request,
                          description="list csrs")
    except Exception as e:
        logger.error(f"Failed to get list of csrs. err : {e}")
        raise QueryError("list csrs", e, api_status(e)) from e


def approve_csr(client, csr: V1CertificateSigningRequest) -> None:
    """Approve a CSR previously returned by list_csrs.

    The approval condition is appended to a copy of the object, keeping the
    conditions already on it, and the copy is sent to the approval
    subresource. The given object only gains the condition once the server
    accepted it. A stale object makes the server answer 409; the caller
    should re-list and retry.

    The request is sent once regardless of the retry policy: a write that
    reached the server before a 5xx would be answered 409 when resent.

    Args:
        client: K8sClient instance
        csr: CSR snapshot as returned by the API server

    Raises:
        ApprovalError: If the server rejected the approval
    """
    approved = copy.deepcopy(csr)
    if approved.status is None:
        approved.status = V1CertificateSigningRequestStatus(conditions=[])
    if approved.status.conditions is None:
        approved.status.conditions = []
    approved.status.conditions.append(approval_condition())

    name = csr.metadata.name
    try:
        client.csr_api.replace_certificate_signing_request_approval(name=name, body=approved)
    except Exception as e:
        logger.error(f"Failed to approve csr {name}, err {e}")
        raise ApprovalError(csr, e, api_status(e)) from e
    csr.status = approved.status
    logger.info(f"Approved csr {name}")


def is_csr_pending(csr: V1CertificateSigningRequest) -> bool:
    """True while a CSR has been neither approved, denied nor failed."""
    conditions = (csr.status.conditions if csr.status else None) or []
    return not any(c.type in (CSR_APPROVED, CSR_DENIED, CSR_FAILED) for c in conditions)


def pending_csrs(csrs: Iterable[V1CertificateSigningRequest]) -> List[V1CertificateSigningRequest]:
    """Filter a CSR list (or its items) down to the pending requests."""
    items = getattr(csrs, 'items', csrs) or []
    return [csr for csr in items if is_csr_pending(csr)]
