"""Host operations backed by local processes."""

import logging
import shlex
import subprocess
import tempfile
from typing import List, Optional, TextIO

from ..config import get_config
from ..exceptions import ExecutionError
from .base import Ops

logger = logging.getLogger("clusterboot.ops.local")

# Enter the mount and IPC namespaces of the host's init process
NSENTER_PREFIX = ["nsenter", "-t", "1", "-m", "-i", "--"]


class LocalOps(Ops):
    """Runs commands with subprocess on the local machine.

    The installer runs in a container, so privileged commands are wrapped with
    nsenter to reach the host. Set ``use_nsenter=False`` when already running
    on the host.
    """

    def __init__(self, use_nsenter: Optional[bool] = None):
        self.use_nsenter = get_config().use_nsenter if use_nsenter is None else use_nsenter

    def exec_command(self, live_logger: TextIO, command: str, *args: str) -> str:
        return self._run(live_logger, [command, *args])

    def exec_privileged_command(self, live_logger: TextIO, command: str, *args: str) -> str:
        cmd = [command, *args]
        if self.use_nsenter:
            cmd = NSENTER_PREFIX + cmd
        return self._run(live_logger, cmd)

    def _run(self, live_logger: Optional[TextIO], cmd: List[str]) -> str:
        printable = " ".join(shlex.quote(part) for part in cmd)
        logger.debug(f"Executing: {printable}")

        output: List[str] = []
        with tempfile.TemporaryFile(mode="w+") as stderr:
            try:
                process = subprocess.Popen(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=stderr,
                    text=True,
                    bufsize=1,  # Line buffered
                )
            except OSError as e:
                logger.error(f"Failed to start {cmd[0]}: {e}")
                raise ExecutionError(cmd[0], cause=e) from e

            with process:
                for line in process.stdout:
                    output.append(line)
                    if live_logger is not None:
                        live_logger.write(line)
                returncode = process.wait()

            if live_logger is not None:
                live_logger.flush()

            if returncode != 0:
                stderr.seek(0)
                error_output = stderr.read()
                logger.error(f"Command '{printable}' failed with code {returncode}: {error_output.strip()}")
                raise ExecutionError(cmd[0], returncode=returncode, output=error_output)

        return "".join(output)
