"""Party model (core record).

Data architecture:
    Party
        Identity and discriminator (PROSPECT / CUSTOMER). The id is generated
        by the caller before the insert so child rows can reference it
        immediately.

    ContactChannel / PartyAddress / PartyAttribute
        Child collections keyed by party id. Written one row at a time by
        partyman.services.party; there is no multi-table transaction.

    secondary_ref
        Record id in the secondary (legacy) system. Written together with
        kind=CUSTOMER, only after the secondary side confirmed creation.
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class PartyKind(models.TextChoices):
    PROSPECT = "PROSPECT", _("Prospect")
    CUSTOMER = "CUSTOMER", _("Customer")


class Party(models.Model):
    """Core record of a prospect or customer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(_("name"), max_length=201, blank=True)
    first_name = models.CharField(_("first name"), max_length=100, blank=True)
    last_name = models.CharField(_("last name"), max_length=100, blank=True)
    kind = models.CharField(
        _("kind"),
        max_length=20,
        choices=PartyKind.choices,
        default=PartyKind.PROSPECT,
        db_index=True,
    )

    # Cross-system reference
    secondary_ref = models.CharField(
        _("secondary system id"),
        max_length=255,
        blank=True,
        db_index=True,
        help_text=_("Record id in the secondary system, set on conversion."),
    )
    converted_at = models.DateTimeField(_("converted at"), null=True, blank=True)

    is_active = models.BooleanField(_("active"), default=True, db_index=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "partyman_party"
        verbose_name = _("party")
        verbose_name_plural = _("parties")
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.name or self.id} ({self.kind})"

    @staticmethod
    def display_name(first_name: str, last_name: str) -> str:
        """Full name (first + last)."""
        return f"{first_name or ''} {last_name or ''}".strip()
