"""Tests for the external formatter collaborator."""

import subprocess

import pytest

from modelgen.codegen.core import FormatError, run_formatter


@pytest.fixture
def fake_run(monkeypatch):
    calls = []

    def install(returncode=0, stderr="", error=None):
        def run(argv, **kwargs):
            calls.append(argv)
            if error is not None:
                raise error
            return subprocess.CompletedProcess(argv, returncode, "", stderr)

        monkeypatch.setattr(subprocess, "run", run)
        return calls

    return install


class TestRunFormatter:
    def test_appends_directory(self, fake_run, tmp_path):
        calls = fake_run()

        run_formatter(("gofmt", "-w"), tmp_path)

        assert calls == [["gofmt", "-w", str(tmp_path)]]

    def test_non_zero_exit(self, fake_run, tmp_path):
        fake_run(returncode=2, stderr="models/user.go:3:1: expected declaration")

        with pytest.raises(FormatError) as exc_info:
            run_formatter(("gofmt", "-w"), tmp_path)

        assert "exit status 2" in str(exc_info.value)
        assert "expected declaration" in str(exc_info.value)

    def test_missing_binary(self, fake_run, tmp_path):
        fake_run(error=FileNotFoundError("No such file or directory: 'gofmt'"))

        with pytest.raises(FormatError, match="Fail to run gofmt"):
            run_formatter(("gofmt", "-w"), tmp_path)

    def test_empty_command(self, tmp_path):
        with pytest.raises(FormatError):
            run_formatter((), tmp_path)
