"""Secondary system sync.

Creates the counterpart of a party in the secondary system and maps the
returned record id back. There is no shared transaction between the two
systems: the caller persists the returned id only after this call
succeeded, and a crash in between leaves an unlinked secondary record.
That record is left in place, it is not rolled back here.
"""

import json
import logging
from typing import Any

from partyman.bridge import get_bridge
from partyman.conf import partyman_settings
from partyman.exceptions import SyncError
from partyman.protocols import PartyView, ScriptBridge, SecondaryRef

logger = logging.getLogger(__name__)


class SecondarySync:
    """Service for secondary system synchronization."""

    def __init__(
        self,
        bridge: ScriptBridge,
        layout: str | None = None,
        create_script: str | None = None,
        config_script: str | None = None,
    ):
        self.bridge = bridge
        self.layout = layout or partyman_settings.SECONDARY_LAYOUT
        self.create_script = create_script or partyman_settings.CREATE_RECORD_SCRIPT
        self.config_script = config_script or partyman_settings.CONFIG_SCRIPT

    @classmethod
    def from_settings(cls) -> "SecondarySync":
        return cls(get_bridge())

    def build_payload(self, view: PartyView) -> dict[str, Any]:
        """Create-record payload for the secondary system."""
        return {
            "layout": self.layout,
            "action": "create",
            "version": "vLatest",
            "fieldData": {
                "Name": view.name,
                "FirstName": view.first_name,
                "LastName": view.last_name,
                "Email": view.email,
                "Phone": view.phone,
                "AddressLine1": view.address_line1,
                "AddressLine2": view.address_line2,
                "City": view.city,
                "State": view.region,
                "PostalCode": view.postal_code,
                "Country": view.country,
                "Industry": view.industry,
                "PartyId": str(view.id),
            },
        }

    async def sync(self, view: PartyView) -> SecondaryRef:
        """
        Create the secondary record for a party.

        Returns:
            SecondaryRef with the secondary record id

        Raises:
            SyncError: Bridge failure, error response or no record id
        """
        response = await self._invoke(self.create_script, self.build_payload(view))
        body = response.get("response")
        record_id = None
        if isinstance(body, dict):
            record_id = body.get("recordId")
        record_id = record_id or response.get("recordId")

        if not record_id:
            raise SyncError(
                f"No record id in response from {self.create_script}",
                script=self.create_script,
                response=response,
            )

        logger.info("Secondary record %s created for party %s", record_id, view.id)
        return SecondaryRef(record_id=str(record_id), layout=self.layout, raw=response)

    async def fetch_configuration(self) -> dict[str, Any]:
        """Query the secondary system configuration."""
        response = await self._invoke(
            self.config_script,
            {"layout": self.layout, "action": "metaData", "version": "vLatest"},
        )
        body = response.get("response")
        return body if isinstance(body, dict) else response

    async def _invoke(self, script: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            raw = await self.bridge.invoke(script, payload)
        except SyncError:
            raise
        except Exception as e:
            logger.warning("Bridge call %s failed: %s", script, e)
            raise SyncError(f"Bridge call {script} failed: {e}", script=script) from e
        return self.parse_response(script, raw)

    @staticmethod
    def parse_response(script: str, raw: Any) -> dict[str, Any]:
        """
        Decode and check a bridge response.

        Failure indicators:
        - "error" key truthy
        - messages[0].code other than "0"
        """
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except ValueError as e:
                raise SyncError(f"Unparseable response from {script}", script=script, response=raw) from e

        if not isinstance(raw, dict):
            raise SyncError(f"Unexpected response from {script}", script=script, response=raw)

        if raw.get("error"):
            raise SyncError(
                raw.get("message") or f"{script} reported an error",
                script=script,
                response=raw,
            )

        messages = raw.get("messages")
        if isinstance(messages, list) and messages and isinstance(messages[0], dict):
            code = str(messages[0].get("code", "0"))
            if code != "0":
                raise SyncError(
                    messages[0].get("message") or f"{script} returned code {code}",
                    script=script,
                    response=raw,
                )

        return raw
