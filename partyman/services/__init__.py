"""Partyman services.

- party: composite create / update / delete
- assembler: read-side fold into PartyView
- conversion: PROSPECT -> CUSTOMER
- sync: secondary system synchronization
- validation: input checks (pure)
- saga: ordered writes with one compensation
"""

from partyman.services import validation
from partyman.services import saga
from partyman.services import assembler
from partyman.services import party
from partyman.services import sync
from partyman.services import conversion

__all__ = ["validation", "saga", "assembler", "party", "sync", "conversion"]
