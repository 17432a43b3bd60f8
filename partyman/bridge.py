"""Script bridges to the secondary system."""

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx
from django.utils.module_loading import import_string

from partyman.conf import partyman_settings
from partyman.exceptions import SyncError
from partyman.protocols import ScriptBridge

logger = logging.getLogger(__name__)


class HttpScriptBridge:
    """
    Runs secondary-system scripts through an HTTP gateway.

    POST {base_url}/scripts/{layout}/{script}
        {"script": <name>, "parameter": <payload as JSON string>}

    The gateway answers with the script result as JSON.
    """

    def __init__(
        self,
        base_url: str | None = None,
        layout: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if base_url is None:
            base_url = partyman_settings.SECONDARY_BRIDGE_URL
        self.base_url = base_url.rstrip("/")
        self.layout = layout or partyman_settings.SECONDARY_LAYOUT
        self.timeout = timeout if timeout is not None else partyman_settings.BRIDGE_TIMEOUT
        self.transport = transport

    def script_url(self, script_name: str) -> str:
        return f"{self.base_url}/scripts/{quote(self.layout, safe='')}/{quote(script_name, safe='')}"

    async def invoke(self, script_name: str, payload: dict[str, Any]) -> Any:
        if not self.base_url:
            raise SyncError("Secondary bridge URL is not configured", script=script_name)

        body = {"script": script_name, "parameter": json.dumps(payload)}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(self.script_url(script_name), json=body)
                response.raise_for_status()
            except httpx.TimeoutException as e:
                logger.warning("Bridge timeout running %s", script_name)
                raise SyncError(f"Timeout running {script_name}: {e}", script=script_name) from e
            except httpx.HTTPStatusError as e:
                logger.warning("Bridge HTTP %s running %s", e.response.status_code, script_name)
                raise SyncError(
                    f"HTTP {e.response.status_code} running {script_name}",
                    script=script_name,
                    response=e.response.text,
                ) from e
            except httpx.HTTPError as e:
                logger.warning("Bridge error running %s: %s", script_name, e)
                raise SyncError(f"Error running {script_name}: {e}", script=script_name) from e

        try:
            return response.json()
        except ValueError as e:
            raise SyncError(
                f"Unparseable response from {script_name}",
                script=script_name,
                response=response.text,
            ) from e


def get_bridge() -> ScriptBridge:
    """Instantiate the configured ScriptBridge."""
    backend_class = import_string(partyman_settings.SECONDARY_BRIDGE_BACKEND)
    return backend_class()
