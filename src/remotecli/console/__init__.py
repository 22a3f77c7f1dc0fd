"""Console module for remotecli.

Runs administrative commands on behalf of the gateway. The gateway only
depends on the ``CommandExecutor`` interface; ``Console`` is the bundled
implementation.

Public API:
    CommandExecutor -- Abstract executor interface
    ConsoleCommand -- Abstract named command
    CommandError -- Raised by commands that cannot complete
    Console -- Registry-based executor
    StatsService -- Per-URI request counter
"""

from remotecli.console.base import CommandError, CommandExecutor, ConsoleCommand
from remotecli.console.console import Console, create_console
from remotecli.console.stats import StatsService

__all__ = [
    "CommandError",
    "CommandExecutor",
    "Console",
    "ConsoleCommand",
    "StatsService",
    "create_console",
]
