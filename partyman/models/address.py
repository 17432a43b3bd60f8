"""PartyAddress model."""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class PartyAddress(models.Model):
    """
    Party postal address.

    The schema allows several rows per party, but only one is used: reads
    and updates look the address up by party id alone.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    party = models.ForeignKey(
        "partyman.Party",
        on_delete=models.CASCADE,
        related_name="addresses",
        verbose_name=_("party"),
    )

    line1 = models.CharField(_("address line 1"), max_length=255, blank=True)
    line2 = models.CharField(_("address line 2"), max_length=255, blank=True)
    city = models.CharField(_("city"), max_length=100, blank=True)
    # Required column; writers store "" when no region was supplied.
    region = models.CharField(_("region"), max_length=100)
    postal_code = models.CharField(_("postal code"), max_length=20, blank=True)
    country = models.CharField(_("country"), max_length=100, blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "partyman_address"
        verbose_name = _("address")
        verbose_name_plural = _("addresses")
        ordering = ["created_at"]

    def __str__(self):
        parts = [p for p in (self.line1, self.city, self.region, self.country) if p]
        return ", ".join(parts) or str(self.id)
