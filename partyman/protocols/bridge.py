"""Secondary system bridge protocol."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ScriptBridge(Protocol):
    """
    Asynchronous request/response bridge to the secondary system.

    The payload and response are opaque JSON objects. The only keys the
    caller relies on are the success/failure indicators.
    """

    async def invoke(self, script_name: str, payload: dict[str, Any]) -> Any:
        """Run a script on the secondary system and return its decoded response."""
        ...
