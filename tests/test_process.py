"""Tests for the subprocess runner."""

import sys

from core.process import NOT_FOUND_EXIT_CODE, TIMEOUT_EXIT_CODE, ProcessResult, SubprocessRunner


class TestSubprocessRunner:
    def test_captures_output(self):
        result = SubprocessRunner().run(sys.executable, ["-c", "print('hello')"])
        assert result.success
        assert result.output == "hello"

    def test_nonzero_exit(self):
        result = SubprocessRunner().run(
            sys.executable, ["-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"]
        )
        assert not result.success
        assert result.exit_code == 3
        assert result.error_text == "boom"

    def test_missing_binary(self):
        result = SubprocessRunner().run("definitely-not-a-real-binary-xyz", [])
        assert result.exit_code == NOT_FOUND_EXIT_CODE
        assert "not found" in result.stderr

    def test_timeout(self):
        result = SubprocessRunner().run(sys.executable, ["-c", "import time; time.sleep(5)"], timeout=0.2)
        assert result.timed_out
        assert result.exit_code == TIMEOUT_EXIT_CODE
        assert not result.success

    def test_env_is_merged(self):
        result = SubprocessRunner().run(
            sys.executable,
            ["-c", "import os; print(os.environ['MULTI_SHOP_TEST_VAR'], bool(os.environ.get('PATH')))"],
            env={"MULTI_SHOP_TEST_VAR": "set"},
        )
        assert result.output == "set True"

    def test_interactive_exit_code(self):
        code = SubprocessRunner().run_interactive(sys.executable, ["-c", "import sys; sys.exit(4)"])
        assert code == 4

    def test_interactive_missing_binary(self):
        code = SubprocessRunner().run_interactive("definitely-not-a-real-binary-xyz", [])
        assert code == NOT_FOUND_EXIT_CODE


class TestProcessResult:
    def test_error_text_falls_back(self):
        assert ProcessResult(exit_code=2, stdout="out").error_text == "out"
        assert ProcessResult(exit_code=2).error_text == "exit code 2"
