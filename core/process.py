"""Process execution port.

Everything that talks to git, gh or the Shopify CLI goes through a
``ProcessRunner`` so workflows can be tested with a fake runner.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)

NOT_FOUND_EXIT_CODE = 127
TIMEOUT_EXIT_CODE = -1


@dataclass
class ProcessResult:
    """Result of a finished subprocess."""

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.exit_code == 0 and not self.timed_out

    @property
    def output(self) -> str:
        return self.stdout.strip()

    @property
    def error_text(self) -> str:
        """Best description of a failure for the user."""
        return self.stderr.strip() or self.stdout.strip() or f"exit code {self.exit_code}"


class ProcessRunner(Protocol):
    def run(
        self,
        command: str,
        args: list[str],
        *,
        cwd: str | None = None,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> ProcessResult: ...

    def run_interactive(
        self,
        command: str,
        args: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
    ) -> int: ...


def _merged_env(env: dict[str, str] | None) -> dict[str, str] | None:
    if not env:
        return None
    merged = os.environ.copy()
    merged.update(env)
    return merged


class SubprocessRunner:
    """Runs real processes with ``subprocess``."""

    def run(
        self,
        command: str,
        args: list[str],
        *,
        cwd: str | None = None,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
    ) -> ProcessResult:
        cmd = [command, *args]
        logger.debug("run: %s (cwd=%s)", " ".join(cmd), cwd)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=_merged_env(env),
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError:
            return ProcessResult(exit_code=NOT_FOUND_EXIT_CODE, stderr=f"{command}: command not found")
        except subprocess.TimeoutExpired:
            return ProcessResult(
                exit_code=TIMEOUT_EXIT_CODE,
                stderr=f"Command timed out after {timeout}s: {' '.join(cmd)}",
                timed_out=True,
            )
        except OSError as e:
            return ProcessResult(exit_code=1, stderr=f"Error: {e}")
        return ProcessResult(exit_code=result.returncode, stdout=result.stdout, stderr=result.stderr)

    def run_interactive(
        self,
        command: str,
        args: list[str],
        *,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
    ) -> int:
        """Run with inherited stdio, relaying SIGINT/SIGTERM to the child."""
        cmd = [command, *args]
        logger.debug("run_interactive: %s", " ".join(cmd))
        try:
            proc = subprocess.Popen(cmd, cwd=cwd, env=_merged_env(env))
        except FileNotFoundError:
            return NOT_FOUND_EXIT_CODE

        def _relay(signum, _frame):
            if proc.poll() is None:
                proc.send_signal(signum)

        relayed = [signal.SIGINT]
        if hasattr(signal, "SIGTERM"):
            relayed.append(signal.SIGTERM)
        previous = {sig: signal.signal(sig, _relay) for sig in relayed}
        try:
            return proc.wait()
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
