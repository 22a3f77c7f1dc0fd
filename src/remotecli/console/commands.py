"""Built-in console commands."""

from __future__ import annotations

import logging
import math
import platform
import time
from typing import TYPE_CHECKING

from remotecli import __version__
from remotecli.console.base import CommandError, ConsoleCommand
from remotecli.console.stats import StatsService

if TYPE_CHECKING:
    from remotecli.console.console import Console

logger = logging.getLogger(__name__)


class HelpCommand(ConsoleCommand):
    name = "help"
    description = "List available commands"

    def __init__(self, console: Console) -> None:
        self._console = console

    def call(self, args: list[str]) -> list[str]:
        lines = ["Available commands:"]
        for command in self._console.commands:
            usage = f"{command.name} {command.usage}".rstrip()
            lines.append(f"  {usage} - {command.description}")
        return lines


class VersionCommand(ConsoleCommand):
    name = "version"
    description = "Display the server version"

    def call(self, args: list[str]) -> list[str]:
        return [f"remotecli {__version__} (Python {platform.python_version()})"]


class StatusCommand(ConsoleCommand):
    name = "status"
    description = "Display uptime and request summary"

    def __init__(self, console: Console, stats: StatsService, started_at: float | None = None) -> None:
        self._console = console
        self._stats = stats
        self._started_at = started_at if started_at is not None else time.monotonic()

    def call(self, args: list[str]) -> list[str]:
        uptime = int(time.monotonic() - self._started_at)
        hours, rest = divmod(uptime, 3600)
        minutes, seconds = divmod(rest, 60)
        return [
            f"Uptime: {hours:d}h {minutes:02d}m {seconds:02d}s",
            f"Commands: {len(self._console.commands)}",
            f"Requests: {self._stats.sum_records()} ({self._stats.count_records()} unique)",
        ]


class StatsCommand(ConsoleCommand):
    """Lists recorded requests.

    A numeric argument is a minimum request count (``-1`` means average
    plus 20%); anything else filters URIs by substring.
    """

    name = "stats"
    description = "Display request statistics"
    usage = "[limiter|pattern]"

    def __init__(self, stats: StatsService) -> None:
        self._stats = stats

    def call(self, args: list[str]) -> list[str]:
        if len(args) > 1:
            raise CommandError(f"Usage: {self.name} {self.usage}", command=self.name)

        limiter = 0
        pattern = ""
        if args:
            try:
                limiter = int(args[0])
            except ValueError:
                pattern = args[0]

        count = self._stats.count_records()
        total = self._stats.sum_records()

        if limiter == -1:
            average = total / count if count else 0.0
            limiter = math.floor(average + 0.2 * average + 0.5)

        records = self._stats.fetch_stats(
            lambda uri, hits: hits >= limiter and pattern in uri
        )

        lines = [
            "Statistics:",
            f"  Requests count: {count} (sum: {total})",
            f"  Recorded: {'[] ' if not records else ''}(limiter: {limiter}, pattern: '{pattern}')",
        ]
        for order, (uri, hits) in enumerate(records, start=1):
            lines.append(f"    {order}. ({hits}) {uri}")
        return lines
