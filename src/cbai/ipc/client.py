"""HTTP-over-Unix-socket client for the clipboard-ai agent."""

from __future__ import annotations

import errno
import logging
from pathlib import Path
from typing import Any, Optional, cast

import httpx

from ..constants import AGENT_BASE_URL, AGENT_BINARY_NAME, AGENT_REQUEST_TIMEOUT_SEC
from ..errors import AgentNotRespondingError, AgentNotRunningError, AgentRequestError
from ..logging import log_event
from .types import ActionResponse, ClipboardResponse, ConfigResponse, StatusResponse

AGENT_NOT_RUNNING_MESSAGE = f"Agent not running. Start with: {AGENT_BINARY_NAME}"
AGENT_NOT_RESPONDING_MESSAGE = "Agent not responding. Try restarting."


def _find_errno(error: BaseException) -> Optional[int]:
    """Walk the exception chain looking for the underlying socket errno."""
    seen: set[int] = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, OSError) and current.errno is not None:
            return current.errno
        current = current.__cause__ or current.__context__
    return None


def _connect_error(error: httpx.ConnectError) -> Exception:
    """Map a connection failure to the agent-specific error it represents."""
    code = _find_errno(error)
    text = str(error)
    if code == errno.ENOENT or "No such file" in text:
        return AgentNotRunningError(AGENT_NOT_RUNNING_MESSAGE)
    if code == errno.ECONNREFUSED or "Connection refused" in text:
        return AgentNotRespondingError(AGENT_NOT_RESPONDING_MESSAGE)
    return AgentRequestError(text or type(error).__name__)


def _status_error_message(response: httpx.Response) -> str:
    body = response.text
    message = body
    try:
        parsed = response.json()
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        message = parsed.get("error") or parsed.get("message") or body
    return f"Request failed ({response.status_code}): {message or 'Unknown error'}"


class AgentClient:
    """Issues JSON requests to the agent over its local socket."""

    def __init__(
        self,
        socket_path: Path,
        timeout: float = AGENT_REQUEST_TIMEOUT_SEC,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            socket_path: Path of the agent's Unix domain socket
            timeout: Per-request timeout in seconds
            transport: Optional transport override (tests use ``httpx.MockTransport``)
        """
        self.socket_path = Path(socket_path)
        self.timeout = timeout
        self._transport = transport

    def _build_transport(self) -> httpx.AsyncBaseTransport:
        if self._transport is not None:
            return self._transport
        return httpx.AsyncHTTPTransport(uds=str(self.socket_path))

    async def _request(self, method: str, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        if self._transport is None and not self.socket_path.exists():
            raise AgentNotRunningError(AGENT_NOT_RUNNING_MESSAGE)

        try:
            async with httpx.AsyncClient(
                transport=self._build_transport(),
                base_url=AGENT_BASE_URL,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            ) as client:
                response = await client.request(method, path, json=body)
        except httpx.ConnectError as e:
            mapped = _connect_error(e)
            self._log_error(method, path, mapped)
            raise mapped from e
        except httpx.HTTPError as e:
            self._log_error(method, path, e)
            raise AgentRequestError(str(e) or type(e).__name__) from e

        if not response.is_success:
            error = AgentRequestError(_status_error_message(response))
            self._log_error(method, path, error)
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise AgentRequestError(f"Invalid JSON response: {response.text}") from e

    def _log_error(self, method: str, path: str, error: Exception) -> None:
        log_event(
            "agent_request_error",
            level=logging.ERROR,
            method=method,
            path=path,
            socket_path=self.socket_path,
            error_type=type(error).__name__,
            error=str(error),
        )

    async def get_status(self) -> StatusResponse:
        return cast(StatusResponse, await self._request("GET", "/status"))

    async def get_clipboard(self) -> ClipboardResponse:
        return cast(ClipboardResponse, await self._request("GET", "/clipboard"))

    async def get_config(self) -> ConfigResponse:
        return cast(ConfigResponse, await self._request("GET", "/config"))

    async def run_action(self, action: str, text: Optional[str] = None) -> ActionResponse:
        """Ask the agent to run an action itself (optionally on explicit text)."""
        body: dict[str, Any] = {"action": action}
        if text:
            body["text"] = text
        return cast(ActionResponse, await self._request("POST", "/action", body))
