"""Partyman models.

A party is stored as one core record (Party) plus three child collections
(ContactChannel, PartyAddress, PartyAttribute). Child rows reference the
party id and are removed by cascade when the party is deleted.
"""

from partyman.models.party import Party, PartyKind
from partyman.models.contact_channel import ContactChannel, ChannelKind
from partyman.models.address import PartyAddress
from partyman.models.attribute import PartyAttribute

__all__ = [
    # Core record
    "Party",
    "PartyKind",
    # Child collections
    "ContactChannel",
    "ChannelKind",
    "PartyAddress",
    "PartyAttribute",
]
