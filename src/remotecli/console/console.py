"""The administrative console.

Holds a registry of named commands and runs one command line at a time.
Commands are not assumed to be thread-safe, so execution is serialized
with a lock and each command runs in the default thread pool.
"""

from __future__ import annotations

import asyncio
import logging

from remotecli.console.base import CommandError, CommandExecutor, ConsoleCommand
from remotecli.console.commands import HelpCommand, StatsCommand, StatusCommand, VersionCommand
from remotecli.console.stats import StatsService
from remotecli.domain.models import ExecutionOutcome

logger = logging.getLogger(__name__)


class Console(CommandExecutor):
    """Registry-based command executor."""

    def __init__(self) -> None:
        self._commands: dict[str, ConsoleCommand] = {}
        self._lock = asyncio.Lock()

    @property
    def commands(self) -> list[ConsoleCommand]:
        """Registered commands, sorted by name."""
        return [self._commands[name] for name in sorted(self._commands)]

    def register(self, command: ConsoleCommand) -> None:
        name = command.name.lower()
        if not name:
            raise ValueError(f"{type(command).__name__} has no name")
        if name in self._commands:
            raise ValueError(f"Command {name} is already registered")
        self._commands[name] = command
        logger.debug("Registered console command: %s", name)

    async def execute(self, command: str) -> ExecutionOutcome:
        parts = command.split()
        if not parts:
            return ExecutionOutcome.err("Missing command")

        name, args = parts[0].lower(), parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            return ExecutionOutcome.err(f"Unknown command {name}")

        async with self._lock:
            loop = asyncio.get_running_loop()
            try:
                lines = await loop.run_in_executor(None, handler.call, args)
            except CommandError as e:
                logger.info("Command %s failed: %s", name, e)
                return ExecutionOutcome.err(str(e))
            except Exception as e:
                logger.exception("Command %s raised an unexpected error", name)
                return ExecutionOutcome.err(f"Command {name} failed: {e}")

        return ExecutionOutcome.ok("\n".join(lines))


def create_console(stats: StatsService | None = None) -> Console:
    """Build a console with the built-in commands registered."""
    stats = stats if stats is not None else StatsService()
    console = Console()
    console.register(HelpCommand(console))
    console.register(VersionCommand())
    console.register(StatusCommand(console, stats))
    console.register(StatsCommand(stats))
    return console
