from django.apps import AppConfig


class PartymanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "partyman"
    verbose_name = "Partyman - Prospects & Customers"
