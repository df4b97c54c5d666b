"""CLI command tests. The server itself is never started."""

from __future__ import annotations

import json
from typing import Any

import pytest

from ohub.app_shell import cli


class TestCli:
    """Command dispatch and exit codes."""

    def test_check_rules(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main(["check-rules"]) == 0
        assert "Rules OK: ohub v1" in capsys.readouterr().out

    def test_missing_rules_file_fails(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Any
    ) -> None:
        monkeypatch.setenv("OHUB_RULES_PATH", str(tmp_path / "missing.yaml"))

        assert cli.main(["check-rules"]) == 1

    def test_check_contentful_without_credentials(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = cli.main(["check-contentful"])

        report = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert report["status"] == "error"
        assert report["space_id"] == "Not set"

    def test_serve_runs_uvicorn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict[str, Any]] = []
        monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))

        assert cli.main(["serve", "--port", "9000"]) == 0

        assert calls[0]["port"] == 9000
        assert calls[0]["host"] == "127.0.0.1"
        assert calls[0]["log_level"] == "info"
