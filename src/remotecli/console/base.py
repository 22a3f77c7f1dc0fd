"""Abstract interfaces for command execution.

``CommandExecutor`` is what the gateway delegates to. ``ConsoleCommand``
is a single named command registered in the bundled console.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from remotecli.domain.models import ExecutionOutcome

logger = logging.getLogger(__name__)


class CommandExecutor(ABC):
    """Runs a command line and reports the outcome.

    Implementations must not raise for command failures; those are
    reported as ``ExecutionOutcome.err(...)``. Callers must not assume
    an executor is safe to call concurrently unless it says so.
    """

    @abstractmethod
    async def execute(self, command: str) -> ExecutionOutcome:
        """Execute a raw command line.

        Args:
            command: The command text as received from the caller.

        Returns:
            ExecutionOutcome with the command output or failure message.
        """
        ...


class ConsoleCommand(ABC):
    """A named console command.

    Subclasses set ``name`` and ``description`` and implement ``call()``.
    ``call()`` runs in a worker thread and may block.
    """

    name: str = ""
    description: str = ""
    usage: str = ""

    @abstractmethod
    def call(self, args: list[str]) -> list[str]:
        """Run the command.

        Args:
            args: Whitespace-separated arguments following the command name.

        Returns:
            Output lines.

        Raises:
            CommandError: If the command cannot complete.
        """
        ...


class CommandError(Exception):
    """Raised by a console command that cannot complete."""

    def __init__(self, message: str, command: str = "") -> None:
        super().__init__(message)
        self.command = command
