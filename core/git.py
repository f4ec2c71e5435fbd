"""Git operations used by the workflows, on top of the process port."""

from __future__ import annotations

import logging

from core.process import ProcessResult, ProcessRunner

logger = logging.getLogger(__name__)


class GitError(RuntimeError):
    """Raised when git cannot answer a question the caller cannot do without."""


class GitClient:
    def __init__(self, runner: ProcessRunner, cwd: str | None = None, timeout: float = 5.0):
        self.runner = runner
        self.cwd = cwd
        self.timeout = timeout

    def _git(self, *args: str, timeout: float | None = None) -> ProcessResult:
        return self.runner.run("git", list(args), cwd=self.cwd, timeout=timeout)

    def current_branch(self) -> str:
        """Name of the checked-out branch ("" on a detached HEAD).

        Raises:
            GitError: not a repository, or git itself failed.
        """
        result = self._git("branch", "--show-current")
        if not result.success:
            raise GitError(f"Failed to get current branch: {result.error_text}")
        return result.stdout.strip()

    def is_repository(self) -> bool:
        return self._git("rev-parse", "--git-dir").success

    def version(self) -> str | None:
        result = self._git("--version", timeout=self.timeout)
        return result.output if result.success else None

    def remote_branch_exists(self, branch: str, remote: str = "origin") -> bool:
        return self._git("rev-parse", "--verify", "--quiet", f"{remote}/{branch}").success

    def commits_behind(self, base: str, head: str) -> int:
        """Commits in ``head`` missing from ``base`` (0 when unknown)."""
        result = self._git("rev-list", "--count", f"{base}..{head}")
        if not result.success:
            return 0
        try:
            return int(result.output)
        except ValueError:
            return 0

    def checkout(self, branch: str) -> ProcessResult:
        return self._git("checkout", branch)

    def create_branch(self, branch: str, start_point: str | None = None) -> ProcessResult:
        args = ["checkout", "-b", branch]
        if start_point:
            args.append(start_point)
        return self._git(*args)

    def push_branch(self, branch: str, remote: str = "origin") -> ProcessResult:
        return self._git("push", "-u", remote, branch)

    def create_and_push_branch(self, branch: str, start_point: str | None = None) -> ProcessResult:
        """Create ``branch`` locally and push it, stopping at the first failure."""
        created = self.create_branch(branch, start_point)
        if not created.success:
            return created
        return self.push_branch(branch)

    def delete_branch(self, branch: str, remote: str | None = "origin") -> ProcessResult:
        local = self._git("branch", "-D", branch)
        if not local.success or remote is None:
            return local
        return self._git("push", remote, "--delete", branch)

    def remote_branches(self, remote: str = "origin") -> list[str]:
        result = self._git("branch", "-r")
        if not result.success:
            return []
        prefix = f"{remote}/"
        branches = []
        for line in result.stdout.splitlines():
            name = line.strip()
            if not name or "->" in name:
                continue
            branches.append(name.removeprefix(prefix))
        return branches

    def changed_files(self, base: str, head: str) -> list[str]:
        result = self._git("diff", "--name-only", f"{base}..{head}")
        if not result.success:
            logger.debug("git diff %s..%s failed: %s", base, head, result.error_text)
            return []
        return [line for line in result.stdout.splitlines() if line.strip()]

    def history_touches(self, path: str) -> bool:
        """Whether any commit on any ref ever touched ``path``."""
        result = self._git(
            "log", "--all", "--full-history", "--pretty=format:%H", "--", path,
            timeout=self.timeout,
        )
        return result.success and bool(result.output)
