"""
Host operations used by the bootstrap client.
"""
from .base import Ops
from .local import LocalOps, NSENTER_PREFIX
from .recording import RecordedCall, RecordingOps

__all__ = [
    'Ops',
    'LocalOps',
    'NSENTER_PREFIX',
    'RecordedCall',
    'RecordingOps',
]
