"""Constants and small types shared by the client modules."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from kubernetes.client import V1CertificateSigningRequestCondition


class NodeFilter(str, Enum):
    """Which nodes list_nodes returns."""
    ALL = 'all'
    MASTERS = 'masters'


MASTER_ROLE_LABEL = 'node-role.kubernetes.io/master'

# etcd operator resource
ETCD_GROUP = 'operator.openshift.io'
ETCD_VERSION = 'v1'
ETCD_PLURAL = 'etcds'
ETCD_NAME = 'cluster'
MERGE_PATCH = 'application/merge-patch+json'

UNSAFE_ETCD_PATCH: Dict[str, Any] = {
    'spec': {
        'unsupportedConfigOverrides': {
            'useUnsupportedUnsafeNonHANonProductionUnstableEtcd': True
        }
    }
}
UNSAFE_ETCD_UNPATCH: Dict[str, Any] = {'spec': {'unsupportedConfigOverrides': None}}

# CSR approval
CSR_APPROVED = 'Approved'
CSR_DENIED = 'Denied'
CSR_FAILED = 'Failed'
APPROVE_REASON = 'NodeCSRApprove'
APPROVE_MESSAGE = 'This CSR was approved by the assisted-installer-controller'


def approval_condition(now: datetime = None) -> V1CertificateSigningRequestCondition:
    """Build the condition appended to a CSR when approving it."""
    return V1CertificateSigningRequestCondition(
        type=CSR_APPROVED,
        status='True',
        reason=APPROVE_REASON,
        message=APPROVE_MESSAGE,
        last_update_time=now or datetime.now(timezone.utc),
    )
