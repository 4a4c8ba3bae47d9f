import io
import logging

import pytest

from clusterboot.exceptions import ExecutionError
from clusterboot.logging import LogWriter
from clusterboot.ops import NSENTER_PREFIX, LocalOps, Ops, RecordingOps


def test_exec_command_captures_stdout():
    sink = io.StringIO()

    output = LocalOps(use_nsenter=False).exec_command(sink, "sh", "-c", "echo hello; echo world")

    assert output == "hello\nworld\n"
    assert sink.getvalue() == "hello\nworld\n"


def test_exec_command_failure():
    with pytest.raises(ExecutionError) as excinfo:
        LocalOps(use_nsenter=False).exec_command(None, "sh", "-c", "echo oops >&2; exit 3")
    assert excinfo.value.returncode == 3
    assert "oops" in excinfo.value.output


def test_exec_command_missing_binary():
    with pytest.raises(ExecutionError) as excinfo:
        LocalOps(use_nsenter=False).exec_command(None, "/nonexistent/clusterboot-binary")
    assert excinfo.value.returncode is None
    assert isinstance(excinfo.value.__cause__, OSError)


def test_exec_privileged_command_uses_nsenter(monkeypatch):
    ops = LocalOps(use_nsenter=True)
    seen = []
    monkeypatch.setattr(ops, "_run", lambda live_logger, cmd: seen.append(cmd) or "")

    ops.exec_privileged_command(None, "oc", "get", "nodes")

    assert seen == [NSENTER_PREFIX + ["oc", "get", "nodes"]]


def test_exec_privileged_command_without_nsenter(caplog):
    writer = LogWriter(logging.getLogger("clusterboot.tests.ops"))

    with caplog.at_level(logging.INFO, logger="clusterboot.tests.ops"):
        output = LocalOps(use_nsenter=False).exec_privileged_command(writer, "echo", "privileged")

    assert output == "privileged\n"
    assert "privileged" in caplog.messages


def test_local_ops_defaults_to_configured_nsenter():
    assert LocalOps().use_nsenter is True


def test_recording_ops_is_an_ops():
    ops = RecordingOps(outputs={"oc": "ok"})
    assert isinstance(ops, Ops)
    assert ops.exec_command(None, "oc", "version") == "ok"
    assert ops.exec_command(None, "crictl", "ps") == ""
    assert [(c.command, c.privileged) for c in ops.calls] == [("oc", False), ("crictl", False)]
