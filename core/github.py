"""GitHub CLI (gh) wrapper for pull request creation."""

from __future__ import annotations

from core.process import ProcessResult, ProcessRunner

GH_REMEDIATION = "Install GitHub CLI: https://cli.github.com/ then run: gh auth login"


class GitHubClient:
    def __init__(self, runner: ProcessRunner, cwd: str | None = None, timeout: float = 5.0):
        self.runner = runner
        self.cwd = cwd
        self.timeout = timeout

    def version(self) -> str | None:
        result = self.runner.run("gh", ["--version"], cwd=self.cwd, timeout=self.timeout)
        if not result.success or not result.output:
            return None
        return result.output.splitlines()[0]

    def is_available(self) -> bool:
        return self.version() is not None

    def create_pr(self, base: str, head: str, title: str, body: str = "") -> ProcessResult:
        args = ["pr", "create", "--base", base, "--head", head, "--title", title, "--body", body]
        return self.runner.run("gh", args, cwd=self.cwd)

    @staticmethod
    def manual_command(base: str, head: str, title: str) -> str:
        return f'gh pr create --base {base} --head {head} --title "{title}"'
