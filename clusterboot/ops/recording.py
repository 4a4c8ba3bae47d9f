"""In-memory host operations for tests and dry runs."""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO, Tuple

from .base import Ops


@dataclass
class RecordedCall:
    """A single command handed to RecordingOps."""
    command: str
    args: List[str]
    privileged: bool


@dataclass
class RecordingOps(Ops):
    """Records every command instead of running it.

    ``outputs`` maps a command name to the output returned for it; ``error``
    is raised from every call when set.
    """
    outputs: Dict[str, str] = field(default_factory=dict)
    error: Optional[Exception] = None
    calls: List[RecordedCall] = field(default_factory=list)

    def exec_command(self, live_logger: TextIO, command: str, *args: str) -> str:
        return self._record(live_logger, command, args, privileged=False)

    def exec_privileged_command(self, live_logger: TextIO, command: str, *args: str) -> str:
        return self._record(live_logger, command, args, privileged=True)

    def _record(self, live_logger: Optional[TextIO], command: str, args: Tuple[str, ...],
                privileged: bool) -> str:
        self.calls.append(RecordedCall(command, list(args), privileged))
        if self.error is not None:
            raise self.error
        output = self.outputs.get(command, "")
        if live_logger is not None and output:
            live_logger.write(output)
            live_logger.flush()
        return output

    @property
    def last_call(self) -> Optional[RecordedCall]:
        return self.calls[-1] if self.calls else None
