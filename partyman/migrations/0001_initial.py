# Generated migration for Party and its child collections

import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Party",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(blank=True, max_length=201, verbose_name="name")),
                ("first_name", models.CharField(blank=True, max_length=100, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=100, verbose_name="last name")),
                (
                    "kind",
                    models.CharField(
                        choices=[("PROSPECT", "Prospect"), ("CUSTOMER", "Customer")],
                        db_index=True,
                        default="PROSPECT",
                        max_length=20,
                        verbose_name="kind",
                    ),
                ),
                (
                    "secondary_ref",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Record id in the secondary system, set on conversion.",
                        max_length=255,
                        verbose_name="secondary system id",
                    ),
                ),
                ("converted_at", models.DateTimeField(blank=True, null=True, verbose_name="converted at")),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "party",
                "verbose_name_plural": "parties",
                "db_table": "partyman_party",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ContactChannel",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "kind",
                    models.CharField(
                        choices=[("EMAIL", "Email"), ("PHONE", "Phone")],
                        max_length=10,
                        verbose_name="kind",
                    ),
                ),
                ("value", models.CharField(blank=True, max_length=255, verbose_name="value")),
                ("is_primary", models.BooleanField(default=False, verbose_name="primary")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "party",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="contact_channels",
                        to="partyman.party",
                        verbose_name="party",
                    ),
                ),
            ],
            options={
                "verbose_name": "contact channel",
                "verbose_name_plural": "contact channels",
                "db_table": "partyman_contact_channel",
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(
                        fields=["party", "kind", "is_primary"],
                        name="partyman_channel_lookup_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="PartyAddress",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("line1", models.CharField(blank=True, max_length=255, verbose_name="address line 1")),
                ("line2", models.CharField(blank=True, max_length=255, verbose_name="address line 2")),
                ("city", models.CharField(blank=True, max_length=100, verbose_name="city")),
                ("region", models.CharField(max_length=100, verbose_name="region")),
                ("postal_code", models.CharField(blank=True, max_length=20, verbose_name="postal code")),
                ("country", models.CharField(blank=True, max_length=100, verbose_name="country")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "party",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="addresses",
                        to="partyman.party",
                        verbose_name="party",
                    ),
                ),
            ],
            options={
                "verbose_name": "address",
                "verbose_name_plural": "addresses",
                "db_table": "partyman_address",
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="PartyAttribute",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        help_text="Category tag (ex: industry)",
                        max_length=50,
                        verbose_name="category",
                    ),
                ),
                ("value", models.TextField(blank=True, verbose_name="value")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "party",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="attributes",
                        to="partyman.party",
                        verbose_name="party",
                    ),
                ),
            ],
            options={
                "verbose_name": "attribute",
                "verbose_name_plural": "attributes",
                "db_table": "partyman_attribute",
                "ordering": ["category"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("party", "category"),
                        name="partyman_unique_attribute_category",
                    )
                ],
            },
        ),
    ]
