from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the mold data responder."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def send_message(self, wire: str) -> Optional[Dict[str, Any]]:
        """Post an encoded message; return the decoded reply, or None if accepted without one."""
        try:
            response = self._client.post(
                "/messages",
                content=wire.encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
            if response.status_code == 404:
                raise typer.BadParameter(response.json().get("detail", "Not found."))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        if response.status_code == 202:
            return None
        return response.json()

    def get_mold_data(self, controller_id: int) -> Dict[str, Any]:
        try:
            response = self._client.get(f"/controllers/{controller_id}/mold-data")
            if response.status_code == 404:
                raise typer.BadParameter(f"No mold data recorded for controller {controller_id}.")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: Any = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        if isinstance(detail, dict):
            issues = detail.get("issues") or []
            detail = "; ".join(
                f"{issue.get('field') or 'message'}: {issue.get('kind')} ({issue.get('detail')})"
                for issue in issues
            ) or detail.get("message_type")
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
