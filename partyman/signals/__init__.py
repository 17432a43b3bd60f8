"""
Partyman signals - public event API.

Emitted signals (all sent with Signal.asend):
- party_created: services.party.create(), kwargs party=PartyView
- party_updated: services.party.update(), kwargs party=PartyView, groups=list
- party_deleted: services.party.delete(), kwargs party_id
- party_converted: services.conversion.convert(), kwargs party, secondary_ref
"""

from django.dispatch import Signal

party_created = Signal()  # sender=Party
party_updated = Signal()  # sender=Party, groups=list[str]
party_deleted = Signal()  # sender=Party
party_converted = Signal()  # sender=Party, secondary_ref=SecondaryRef
