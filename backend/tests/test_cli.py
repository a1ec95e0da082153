"""CLI tests."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from secure_store.backends import MemoryBackend
from secure_store.cli import main as cli
from secure_store.models.results import BackendError

runner = CliRunner()


@pytest.fixture
def shared_backend(monkeypatch: pytest.MonkeyPatch) -> MemoryBackend:
    backend = MemoryBackend()
    monkeypatch.setattr(cli, "create_backend", lambda settings: backend)
    monkeypatch.setenv("USEC_LOG_JSON", "false")
    return backend


def test_save_load_delete(shared_backend: MemoryBackend) -> None:
    result = runner.invoke(cli.app, ["save", "app1", "token-1", "--namespace", "com.example.app"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"status": "ok"}

    result = runner.invoke(cli.app, ["load", "app1", "-n", "com.example.app"])
    assert result.exit_code == 0
    assert result.stdout == "token-1\n"

    result = runner.invoke(cli.app, ["delete", "app1", "-n", "com.example.app"])
    assert result.exit_code == 0
    result = runner.invoke(cli.app, ["load", "app1", "-n", "com.example.app"])
    assert result.exit_code == 1


def test_save_reads_stdin(shared_backend: MemoryBackend) -> None:
    result = runner.invoke(cli.app, ["save", "app1", "-n", "ns"], input='{"id_token": "x"}')
    assert result.exit_code == 0
    assert shared_backend.records[0].secret == '{"id_token": "x"}'


def test_delete_all_requires_confirmation(shared_backend: MemoryBackend) -> None:
    for name in ("app1", "app2"):
        runner.invoke(cli.app, ["save", name, "v", "-n", "ns"])

    result = runner.invoke(cli.app, ["delete-all", "-n", "ns"], input="n\n")
    assert result.exit_code == 1
    assert len(shared_backend.records) == 2

    result = runner.invoke(cli.app, ["delete-all", "-n", "ns", "--yes"])
    assert result.exit_code == 0
    assert shared_backend.records == []


def test_namespace_from_environment(shared_backend: MemoryBackend, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("USEC_NAMESPACE", "env.ns")
    runner.invoke(cli.app, ["save", "app1", "v"])
    assert shared_backend.records[0].attributes["xdg:schema"] == "env.ns"


def test_missing_namespace_exits_before_backend(shared_backend: MemoryBackend) -> None:
    result = runner.invoke(cli.app, ["save", "app1", "v"])
    assert result.exit_code == 2
    assert shared_backend.calls == []


def test_load_reports_backend_error(monkeypatch: pytest.MonkeyPatch) -> None:
    class Broken(MemoryBackend):
        def lookup(self, schema, attributes):
            return BackendError("lookup", "no bus")

    monkeypatch.setattr(cli, "create_backend", lambda settings: Broken())
    monkeypatch.setenv("USEC_LOG_JSON", "false")
    result = runner.invoke(cli.app, ["load", "app1", "-n", "ns"])
    assert result.exit_code == 2


def test_metrics_is_not_a_command() -> None:
    result = runner.invoke(cli.app, ["metrics"])
    assert result.exit_code != 0
