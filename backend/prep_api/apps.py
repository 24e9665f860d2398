from django.apps import AppConfig


class PrepApiConfig(AppConfig):
    name = "prep_api"
    verbose_name = "UTME Prep API"

    def ready(self):
        from . import sqlite  # noqa: F401
