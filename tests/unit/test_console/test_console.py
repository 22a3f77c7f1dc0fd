"""Tests for the Console command executor."""

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from remotecli.console.base import CommandError, CommandExecutor, ConsoleCommand
from remotecli.console.console import Console, create_console


class EchoCommand(ConsoleCommand):
    name = "echo"
    description = "Echo arguments"

    def call(self, args: list[str]) -> list[str]:
        return [" ".join(args)]


class FailingCommand(ConsoleCommand):
    name = "fail"
    description = "Always fails"

    def call(self, args: list[str]) -> list[str]:
        raise CommandError("Nothing to do", command=self.name)


class BrokenCommand(ConsoleCommand):
    name = "boom"
    description = "Raises an unexpected error"

    def call(self, args: list[str]) -> list[str]:
        raise RuntimeError("kaboom")


class SlowCommand(ConsoleCommand):
    """Tracks how many calls run at the same time."""

    name = "slow"
    description = "Sleeps briefly"

    def __init__(self) -> None:
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def call(self, args: list[str]) -> list[str]:
        with self._lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        time.sleep(0.02)
        with self._lock:
            self.active -= 1
        return ["done"]


@pytest.fixture
def console() -> Console:
    c = Console()
    c.register(EchoCommand())
    c.register(FailingCommand())
    c.register(BrokenCommand())
    return c


class TestInterfaces:
    def test_cannot_instantiate_executor(self) -> None:
        with pytest.raises(TypeError):
            CommandExecutor()  # type: ignore[abstract]

    def test_command_error_carries_command(self) -> None:
        error = CommandError("bad args", command="stats")
        assert str(error) == "bad args"
        assert error.command == "stats"


class TestRegistry:
    def test_commands_sorted(self, console: Console) -> None:
        assert [c.name for c in console.commands] == ["boom", "echo", "fail"]

    def test_duplicate_registration(self, console: Console) -> None:
        with pytest.raises(ValueError, match="already registered"):
            console.register(EchoCommand())

    def test_nameless_command(self, console: Console) -> None:
        class Nameless(EchoCommand):
            name = ""

        with pytest.raises(ValueError, match="has no name"):
            console.register(Nameless())

    def test_default_console(self) -> None:
        names = [c.name for c in create_console().commands]
        assert names == ["help", "stats", "status", "version"]


class TestExecute:
    @pytest.mark.asyncio
    async def test_success(self, console: Console) -> None:
        outcome = await console.execute("echo hello   world")
        assert outcome.is_ok
        assert outcome.payload == "hello world"
        assert outcome.error is None

    @pytest.mark.asyncio
    async def test_name_is_case_insensitive(self, console: Console) -> None:
        outcome = await console.execute("ECHO hi")
        assert outcome.payload == "hi"

    @pytest.mark.asyncio
    async def test_unknown_command(self, console: Console) -> None:
        outcome = await console.execute("reboot now")
        assert not outcome.is_ok
        assert outcome.error == "Unknown command reboot"

    @pytest.mark.asyncio
    async def test_blank_command(self, console: Console) -> None:
        outcome = await console.execute("   ")
        assert outcome.error == "Missing command"

    @pytest.mark.asyncio
    async def test_command_error_becomes_failure(self, console: Console) -> None:
        outcome = await console.execute("fail")
        assert outcome.error == "Nothing to do"

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_failure(self, console: Console) -> None:
        outcome = await console.execute("boom")
        assert outcome.error == "Command boom failed: kaboom"

    @pytest.mark.asyncio
    async def test_execution_is_serialized(self) -> None:
        slow = SlowCommand()
        console = Console()
        console.register(slow)

        outcomes = await asyncio.gather(*(console.execute("slow") for _ in range(4)))

        assert all(o.payload == "done" for o in outcomes)
        assert slow.max_active == 1

    @pytest.mark.asyncio
    async def test_help_lists_commands(self) -> None:
        outcome = await create_console().execute("help")
        lines = outcome.payload.splitlines()
        assert lines[0] == "Available commands:"
        assert "  stats [limiter|pattern] - Display request statistics" in lines
        assert "  help - List available commands" in lines
