"""
Partyman configuration.

Usage in settings.py:
    PARTYMAN = {
        "SECONDARY_BRIDGE_URL": "https://fm-bridge.internal",
        "SECONDARY_LAYOUT": "devCustomers",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class PartymanSettings:
    """Partyman configuration settings."""

    # Secondary system bridge (dotted path to a ScriptBridge class)
    SECONDARY_BRIDGE_BACKEND: str = "partyman.bridge.HttpScriptBridge"
    SECONDARY_BRIDGE_URL: str = ""
    SECONDARY_LAYOUT: str = "devCustomers"
    BRIDGE_TIMEOUT: float = 30.0

    # Script names on the secondary system
    CREATE_RECORD_SCRIPT: str = "JS * Create Customer"
    CONFIG_SCRIPT: str = "JS * Fetch Config"

    # Category exposed as a flat field on PartyView
    CONVENIENCE_CATEGORY: str = "industry"


def get_partyman_settings() -> PartymanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "PARTYMAN", {})
    return PartymanSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_partyman_settings(), name)


partyman_settings = _LazySettings()
