"""Typer-based CLI entry point."""

from __future__ import annotations

import json
import logging
from enum import Enum
from functools import wraps
from pathlib import Path
from typing import Any, Optional

import typer
from rich import print
from rich.table import Table

from .config import CANCELLED_ERROR_CODE
from .core.hooks import PolicyHooks
from .core.manager import LoadingManager
from .core.provider import ContentProvider
from .core.status import LoadingStatus
from .errors import ContentLoadError, LoadStateError, SettingsError
from .settings.manager import SettingsManager

app = typer.Typer(help="Inspect and exercise loading-status orchestration")
settings_app = typer.Typer(help="Manage the status view settings file")
app.add_typer(settings_app, name="settings")


class Outcome(str, Enum):
    success = "success"
    empty = "empty"
    fail = "fail"
    cancel = "cancel"
    process_fail = "process-fail"


def _handle_errors(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SettingsError as exc:
            typer.echo(f"Settings error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except LoadStateError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


class _ScriptedProvider(ContentProvider, PolicyHooks):
    """Owner whose requests resolve immediately with a scripted outcome."""

    def __init__(self) -> None:
        self.outcome = Outcome.success
        self.log: list[tuple[str, str]] = []

    def load_content(self, ignore_cache: bool, completion) -> None:
        self.log.append(("provider", f"load_content(ignore_cache={ignore_cache})"))
        if self.outcome is Outcome.fail:
            completion(ContentLoadError("The server could not be reached"), None)
        elif self.outcome is Outcome.cancel:
            completion(ContentLoadError("cancelled", code=CANCELLED_ERROR_CODE), None)
        elif self.outcome is Outcome.empty:
            completion(None, [])
        else:
            completion(None, ["item-1", "item-2", "item-3"])

    def load_success(self, response: Any, completion) -> None:
        self.log.append(("provider", f"load_success({len(response)} item(s))"))
        completion(self.outcome is not Outcome.process_fail)

    def on_status_changed(self, status: LoadingStatus) -> None:
        self.log.append(("status", status.name))

    def on_load_failed(self, error) -> None:
        self.log.append(("hook", f"on_load_failed({error})"))

    def on_load_cancelled(self, error) -> None:
        self.log.append(("hook", "on_load_cancelled"))

    def on_paging_failed(self, error) -> None:
        self.log.append(("hook", f"on_paging_failed({error})"))


class _ConsolePresenter:
    """Record presenter directives instead of drawing them."""

    def __init__(self, log: list[tuple[str, str]]) -> None:
        self._log = log

    def add_default_status_views(self) -> None:
        self._log.append(("view", "add default status views"))

    def show_loading(self) -> None:
        self._log.append(("view", "show loading"))

    def hide_loading(self) -> None:
        self._log.append(("view", "hide loading"))

    def show_failed(self, message: str) -> None:
        self._log.append(("view", f"show failed: {message}"))

    def show_empty(self, message: str) -> None:
        self._log.append(("view", f"show empty: {message}"))

    def hide_status_views(self) -> None:
        self._log.append(("view", "hide failed/empty"))

    def set_automatically_adjusts_for_scroll_view(self, container: Any) -> None:
        pass

    def update_frame_for_scroll_view(self, container: Any) -> None:
        pass


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
@_handle_errors
def simulate(
    outcome: Outcome = typer.Option(Outcome.success, help="Result of the last request"),
    refresh: bool = typer.Option(False, help="Reload again after the initial load"),
    page: bool = typer.Option(False, help="Request a page after the initial load"),
    force: bool = typer.Option(False, help="Force the refresh past the loaded check"),
    background: bool = typer.Option(False, help="Refresh in the background"),
) -> None:
    """Drive a loading manager through a scripted request sequence."""

    owner = _ScriptedProvider()
    manager = LoadingManager(owner, presenter=_ConsolePresenter(owner.log))

    steps: list[tuple[str, Any]] = [("reload_content()", manager.reload_content)]
    if refresh:
        steps.append(
            (
                f"reload_content(force_reload={force}, background={background})",
                lambda: manager.reload_content(force, background),
            )
        )
    if page:
        steps.append(("page_content()", manager.page_content))

    table = Table(title="Loading simulation")
    table.add_column("Step")
    table.add_column("Kind")
    table.add_column("Detail")
    for index, (label, action) in enumerate(steps):
        owner.outcome = outcome if index == len(steps) - 1 else Outcome.success
        owner.log.clear()
        started = action()
        if not started:
            table.add_row(label, "skipped", f"status stays {manager.loading_status.name}")
            continue
        for kind, detail in owner.log:
            table.add_row(label, kind, detail)
            label = ""
    print(table)
    print(f"[bold]Final status:[/bold] {manager.loading_status.name}")


@settings_app.command("show")
@_handle_errors
def settings_show(path: Optional[Path] = typer.Option(None, help="Settings file to read")) -> None:
    """Print the effective settings."""

    settings = SettingsManager(path)
    settings.load()
    print(f"[dim]{settings.path}[/dim]")
    print(json.dumps(settings.as_dict(), indent=2, ensure_ascii=False))


@settings_app.command("set")
@_handle_errors
def settings_set(
    key: str,
    value: str,
    path: Optional[Path] = typer.Option(None, help="Settings file to update"),
) -> None:
    """Set KEY (dotted, e.g. messages.empty) to VALUE (parsed as JSON when possible)."""

    try:
        parsed: Any = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    settings = SettingsManager(path)
    settings.load()
    settings.set(key, parsed)
    print(f"[green]Set {key} = {parsed!r}")


if __name__ == "__main__":  # pragma: no cover
    app()
