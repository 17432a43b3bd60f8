"""Partyman protocols."""

from partyman.protocols.party import (
    PartyView,
    SecondaryRef,
    ConversionCheck,
    ConversionResult,
)
from partyman.protocols.store import RecordStore
from partyman.protocols.bridge import ScriptBridge

__all__ = [
    # Party
    "PartyView",
    "SecondaryRef",
    "ConversionCheck",
    "ConversionResult",
    # Backends
    "RecordStore",
    "ScriptBridge",
]
