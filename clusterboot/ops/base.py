"""Host operations interface."""
from abc import ABC, abstractmethod
from typing import TextIO


class Ops(ABC):
    """Capability to run commands on the host the installer runs on.

    Implementations stream command output to ``live_logger`` while it runs
    and return the captured standard output.
    """

    @abstractmethod
    def exec_command(self, live_logger: TextIO, command: str, *args: str) -> str:
        """Run a command in the current namespaces."""

    @abstractmethod
    def exec_privileged_command(self, live_logger: TextIO, command: str, *args: str) -> str:
        """Run a command with host privileges."""
