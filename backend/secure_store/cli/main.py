"""CLI entrypoint for the secure store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from secure_store.core.config import Settings
from secure_store.core.logging import configure_logging
from secure_store.dependencies import create_backend
from secure_store.models.results import BackendError, Found
from secure_store.store import UserSecureStore

app = typer.Typer(name="usec", help="Inspect and manage stored user credentials")

NamespaceOption = typer.Option(None, "--namespace", "-n", help="Override the configured namespace")
ConfigOption = typer.Option(None, "--config", help="Path to a YAML config file")


def _open_store(namespace: Optional[str], config: Optional[Path]) -> UserSecureStore:
    settings = Settings.from_yaml(config)
    if namespace is not None:
        settings.namespace = namespace
    configure_logging(settings.log_level, use_json=settings.log_json)
    if not settings.namespace:
        typer.echo("No namespace configured; set store.namespace or pass --namespace", err=True)
        raise typer.Exit(code=2)
    return UserSecureStore(
        settings.namespace,
        create_backend(settings),
        collection=settings.collection,
        label=settings.label,
    )


@app.command()
def load(
    app_name: str = typer.Argument(..., help="Application name the data was saved for"),
    namespace: Optional[str] = NamespaceOption,
    config: Optional[Path] = ConfigOption,
) -> None:
    """Print the data stored for an application."""
    store = _open_store(namespace, config)
    result = store.lookup(app_name)
    if isinstance(result, Found):
        typer.echo(result.value)
        return
    if isinstance(result, BackendError):
        typer.echo(f"Secret backend error during {result.operation}: {result.detail}", err=True)
        raise typer.Exit(code=2)
    typer.echo(f"No data stored for {app_name!r}", err=True)
    raise typer.Exit(code=1)


@app.command()
def save(
    app_name: str = typer.Argument(..., help="Application name to save the data for"),
    payload: Optional[str] = typer.Argument(None, help="Data to store; read from stdin when omitted"),
    namespace: Optional[str] = NamespaceOption,
    config: Optional[Path] = ConfigOption,
) -> None:
    """Store data for an application, replacing any previous value."""
    store = _open_store(namespace, config)
    if payload is None:
        payload = typer.get_text_stream("stdin").read()
    store.save(app_name, payload)
    typer.echo(json.dumps({"status": "ok"}))


@app.command()
def delete(
    app_name: str = typer.Argument(..., help="Application name to delete data for"),
    namespace: Optional[str] = NamespaceOption,
    config: Optional[Path] = ConfigOption,
) -> None:
    """Delete the data stored for one application."""
    store = _open_store(namespace, config)
    store.delete_user_data(app_name)
    typer.echo(json.dumps({"status": "ok"}))


@app.command("delete-all")
def delete_all(
    yes: bool = typer.Option(False, "--yes", help="Do not ask for confirmation"),
    namespace: Optional[str] = NamespaceOption,
    config: Optional[Path] = ConfigOption,
) -> None:
    """Delete every record stored under the namespace."""
    store = _open_store(namespace, config)
    if not yes:
        typer.confirm(f"Delete all data in namespace {store.namespace!r}?", abort=True)
    store.delete_all_data()
    typer.echo(json.dumps({"status": "ok"}))


if __name__ == "__main__":
    app()
