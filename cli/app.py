from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_error, render_fields, render_reply
from models.envelope import Message
from models.errors import MessageDecodeError
from models.mold_data import ReadMoldDataMessage, RequestMoldDataMessage
from models.result import build
from protocol import codec


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Inspect and exchange mold data protocol messages.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


def _decode_file(path: Path) -> Message:
    try:
        return codec.decode(path.read_text(encoding="utf-8"))
    except MessageDecodeError as exc:
        render_error(exc)
        raise typer.Exit(code=1) from exc


def _send(state: CLIState, message: Message) -> None:
    typer.echo(f"Sending {message.type_name} (sequence {message.sequence}) to {state.config.base_url} ...")
    reply = state.client.send_message(codec.encode(message))
    typer.echo()
    render_reply(reply)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Responder API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the responder to answer.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("inspect")
def inspect_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to a JSON wire message."),
) -> None:
    """Decode a wire message locally and print its fields in wire order."""
    message = _decode_file(file)
    render_fields(message.type_name, message.fields())


@app.command("send")
def send_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to a JSON wire message."),
) -> None:
    """Validate a wire message locally, then submit it to the responder."""
    state = _get_state(ctx)
    _send(state, _decode_file(file))


@app.command("request")
def request_command(
    ctx: typer.Context,
    controller_id: int = typer.Argument(..., help="Controller to request mold data from."),
    priority: int = typer.Option(0, "--priority", "-p", help="Message priority."),
) -> None:
    """Request the full mold data snapshot of a controller."""
    state = _get_state(ctx)
    result = build(RequestMoldDataMessage, controller_id=controller_id, priority=priority)
    if not result.ok:
        render_error(result.error)
        raise typer.Exit(code=1)
    _send(state, result.unwrap())


@app.command("read")
def read_command(
    ctx: typer.Context,
    controller_id: int = typer.Argument(..., help="Controller to read from."),
    field: str = typer.Argument(..., help="Name of the mold data field."),
    priority: int = typer.Option(0, "--priority", "-p", help="Message priority."),
) -> None:
    """Read the current value of a single mold data field."""
    state = _get_state(ctx)
    result = build(ReadMoldDataMessage, controller_id=controller_id, field=field, priority=priority)
    if not result.ok:
        render_error(result.error)
        raise typer.Exit(code=1)
    _send(state, result.unwrap())


@app.command("snapshot")
def snapshot_command(
    ctx: typer.Context,
    controller_id: int = typer.Argument(..., help="Controller whose stored mold data to show."),
) -> None:
    """Show the latest mold data snapshot the responder holds for a controller."""
    state = _get_state(ctx)
    render_reply(state.client.get_mold_data(controller_id))
