from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import typer

from models.errors import MessageValidationError


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        if isinstance(value, dict):
            typer.echo(f"{key}:")
            for name, reading in value.items():
                typer.echo(f"  - {name}: {reading}")
            continue
        typer.echo(f"{key}: {value}")


def render_fields(type_name: str, pairs: Iterable[tuple[str, Any]]) -> None:
    """Print a message's members in wire order."""
    echo_heading(type_name)
    echo_key_values(pairs)


def render_reply(payload: Optional[Dict[str, Any]]) -> None:
    if payload is None:
        typer.secho("Message accepted; no reply.", fg=typer.colors.GREEN)
        return
    type_name = str(payload.get("$type", "Reply"))
    render_fields(type_name, [(key, value) for key, value in payload.items() if key != "$type"])


def render_error(exc: MessageValidationError) -> None:
    typer.secho(f"Invalid {exc.message_type}:", fg=typer.colors.RED, err=True)
    for issue in exc.issues:
        typer.secho(
            f"  - {issue.field or 'message'}: {issue.kind.value} ({issue.detail})",
            fg=typer.colors.RED,
            err=True,
        )
