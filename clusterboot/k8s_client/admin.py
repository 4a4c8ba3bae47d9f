"""Run the cluster administration CLI through the host."""

import logging
from typing import List

from ..logging import LogWriter
from ..ops import Ops

logger = logging.getLogger("clusterboot.k8s_client.admin")


def run_oc_command(client, args: List[str], kubeconfig_path: str, ops: Ops) -> str:
    """Run the admin command against the cluster with the given kubeconfig.

    Errors raised by ``ops`` propagate unchanged.

    Args:
        client: K8sClient instance
        args: Arguments after the command name, e.g. ["get", "nodes"]
        kubeconfig_path: Kubeconfig passed with --kubeconfig
        ops: Host operations used to run the command

    Returns:
        str: Standard output of the command
    """
    logger.info(f"Running {client.admin_command} command with args {args}")
    args = [f"--kubeconfig={kubeconfig_path}", *args]
    return ops.exec_privileged_command(LogWriter(client.log), client.admin_command, *args)
