"""PartyAttribute model - category-tagged freeform values (e.g. industry)."""

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class PartyAttribute(models.Model):
    """One value per (party, category)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    party = models.ForeignKey(
        "partyman.Party",
        on_delete=models.CASCADE,
        related_name="attributes",
        verbose_name=_("party"),
    )

    category = models.CharField(
        _("category"),
        max_length=50,
        help_text=_("Category tag (ex: industry)"),
    )
    value = models.TextField(_("value"), blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        db_table = "partyman_attribute"
        verbose_name = _("attribute")
        verbose_name_plural = _("attributes")
        ordering = ["category"]
        constraints = [
            models.UniqueConstraint(
                fields=["party", "category"],
                name="partyman_unique_attribute_category",
            ),
        ]

    def __str__(self):
        return f"{self.category}: {self.value[:50]}"
