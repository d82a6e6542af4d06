"""Mini README: Entry point CLI for the flightaction service.

Commands:
    * run - serve the HTTP interface with uvicorn.
    * action - run one or more actions against the configured channel.
    * channels - list registered channel providers.

Settings come from ``FLIGHTACTION_`` environment variables (see
``flightaction.configuration``); options given here take precedence.
"""

from __future__ import annotations

import threading
from typing import List

import typer
import uvicorn

from flightaction.action import ACTION_DESCRIPTIONS, Action, ActionResult
from flightaction.channel import REGISTRY
from flightaction.configuration import get_settings
from flightaction.interface import open_session
from flightaction.logging_utils import configure_root_logger
from flightaction.utils import load_entry_point_plugins

cli = typer.Typer(help="Send high-level actions to a vehicle.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Serving flightaction on {effective_host}:{effective_port} "
        f"(provider '{settings.channel_provider}').\n"
        f"Try: curl -X POST http://{browser_host}:{effective_port}/actions/arm"
    )
    uvicorn.run(
        "flightaction.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def action(
    names: List[str] = typer.Argument(..., help="Actions to run in order."),
    use_callback: bool = typer.Option(
        False, "--callback", help="Use the non-blocking form and wait for its callback."
    ),
    stop_on_failure: bool = typer.Option(
        True, help="Skip remaining actions after the first non-success result."
    ),
    callback_timeout: float = typer.Option(
        30.0, min=0.0, help="Seconds to wait for each callback before reporting a timeout."
    ),
) -> None:
    """Run actions against the configured channel and print each result."""

    settings = get_settings()
    configure_root_logger(settings.log_level)
    unknown = [name for name in names if name not in ACTION_DESCRIPTIONS]
    if unknown:
        raise typer.BadParameter(
            f"unknown action(s) {', '.join(unknown)}; choose from {', '.join(ACTION_DESCRIPTIONS)}"
        )
    try:
        session = open_session(settings)
    except KeyError as error:
        raise typer.BadParameter(str(error)) from error

    failed = False
    with session:
        for name in names:
            if use_callback:
                result = _perform_with_callback(session.action, name, callback_timeout)
            else:
                result = session.action.perform(name)
            typer.echo(f"{name}: {result.description}")
            if result is not ActionResult.SUCCESS:
                failed = True
                if stop_on_failure:
                    break
    if failed:
        raise typer.Exit(code=1)


@cli.command()
def channels() -> None:
    """List the channel providers that can be configured."""

    load_entry_point_plugins()
    for provider in REGISTRY.available_providers():
        typer.echo(provider)


def _perform_with_callback(dispatcher: Action, name: str, timeout: float) -> ActionResult:
    done = threading.Event()
    results: List[ActionResult] = []

    def _on_result(result: ActionResult) -> None:
        results.append(result)
        done.set()

    dispatcher.perform_async(name, _on_result)
    if not done.wait(timeout):
        typer.echo(f"{name}: no answer within {timeout:g}s", err=True)
        return ActionResult.TIMEOUT
    return results[0]


if __name__ == "__main__":
    cli()
