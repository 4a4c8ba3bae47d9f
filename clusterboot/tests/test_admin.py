import logging

import pytest

from clusterboot.exceptions import ExecutionError
from clusterboot.k8s_client import K8sClient
from clusterboot.ops import RecordingOps


def test_run_oc_command_prepends_kubeconfig(client):
    ops = RecordingOps(outputs={"oc": "NAME       STATUS\nmaster-0   Ready\n"})

    output = client.run_oc_command(["get", "nodes"], "/tmp/kubeconfig", ops)

    assert output == "NAME       STATUS\nmaster-0   Ready\n"
    call = ops.last_call
    assert call.command == "oc"
    assert call.args == ["--kubeconfig=/tmp/kubeconfig", "get", "nodes"]
    assert call.privileged


def test_run_oc_command_does_not_touch_caller_args(client):
    args = ["adm", "certificate", "approve", "csr-a"]
    client.run_oc_command(args, "/tmp/kubeconfig", RecordingOps())
    assert args == ["adm", "certificate", "approve", "csr-a"]


def test_run_oc_command_streams_output_to_client_logger(client, caplog):
    ops = RecordingOps(outputs={"oc": "line one\nline two\n"})

    with caplog.at_level(logging.INFO, logger="clusterboot.k8s_client.core"):
        client.run_oc_command(["get", "co"], "/tmp/kubeconfig", ops)

    assert "line one" in caplog.messages
    assert "line two" in caplog.messages


def test_run_oc_command_passes_errors_through(client):
    error = ExecutionError("oc", returncode=1, output="error: unauthorized")
    ops = RecordingOps(error=error)

    with pytest.raises(ExecutionError) as excinfo:
        client.run_oc_command(["get", "nodes"], "/tmp/kubeconfig", ops)
    assert excinfo.value is error


def test_admin_command_is_configurable(client):
    custom = K8sClient(client._api_client, client.core_api, client.custom_api, client.csr_api,
                       admin_command="kubectl")
    ops = RecordingOps()

    custom.run_oc_command(["get", "nodes"], "/tmp/kubeconfig", ops)

    assert ops.last_call.command == "kubectl"
