"""Scriptable stand-in for the process runner.

Rules match on the command and a prefix of its arguments; the most specific
(longest prefix) rule wins. Unmatched commands succeed with empty output.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.process import ProcessResult


@dataclass
class Call:
    command: str
    args: list[str]
    cwd: str | None = None
    timeout: float | None = None
    env: dict[str, str] | None = None

    @property
    def line(self) -> str:
        return " ".join([self.command, *self.args])


@dataclass
class FakeRunner:
    calls: list[Call] = field(default_factory=list)
    interactive_calls: list[Call] = field(default_factory=list)
    interactive_exit_code: int = 0
    _rules: list[tuple[str, tuple[str, ...], ProcessResult]] = field(default_factory=list)

    def on(self, command: str, *args: str, exit_code: int = 0, stdout: str = "", stderr: str = "") -> FakeRunner:
        self._rules.append((command, args, ProcessResult(exit_code=exit_code, stdout=stdout, stderr=stderr)))
        return self

    def missing(self, command: str) -> FakeRunner:
        return self.on(command, exit_code=127, stderr=f"{command}: command not found")

    def run(self, command, args, *, cwd=None, timeout=None, env=None) -> ProcessResult:
        self.calls.append(Call(command, list(args), cwd, timeout, env))
        best = None
        for rule_command, prefix, result in self._rules:
            if rule_command != command or tuple(args[: len(prefix)]) != prefix:
                continue
            if best is None or len(prefix) >= len(best[0]):
                best = (prefix, result)
        return best[1] if best else ProcessResult(exit_code=0)

    def run_interactive(self, command, args, *, cwd=None, env=None) -> int:
        self.interactive_calls.append(Call(command, list(args), cwd, None, env))
        return self.interactive_exit_code

    @property
    def lines(self) -> list[str]:
        return [call.line for call in self.calls]

    def ran(self, fragment: str) -> bool:
        return any(fragment in line for line in self.lines)
