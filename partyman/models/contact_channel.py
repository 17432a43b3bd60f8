"""
ContactChannel model - Party contact channels (email, phone).
"""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class ChannelKind(models.TextChoices):
    EMAIL = "EMAIL", _("Email")
    PHONE = "PHONE", _("Phone")


class ContactChannel(models.Model):
    """
    Party contact channel.

    Rules (kept by the write orchestrator, not by the database):
    - Only 1 is_primary=True per (party, kind)

    The read side picks the first primary row per kind, so a violated
    invariant never yields two emails or two phones in a view.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    party = models.ForeignKey(
        "partyman.Party",
        on_delete=models.CASCADE,
        related_name="contact_channels",
        verbose_name=_("party"),
    )

    kind = models.CharField(_("kind"), max_length=10, choices=ChannelKind.choices)
    value = models.CharField(_("value"), max_length=255, blank=True)
    is_primary = models.BooleanField(_("primary"), default=False)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "partyman_contact_channel"
        verbose_name = _("contact channel")
        verbose_name_plural = _("contact channels")
        ordering = ["created_at"]
        indexes = [
            models.Index(
                fields=["party", "kind", "is_primary"],
                name="partyman_channel_lookup_idx",
            ),
        ]

    def __str__(self):
        primary = " [primary]" if self.is_primary else ""
        return f"{self.kind}: {self.value}{primary}"
