from django.apps import AppConfig


class RentalsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "rentals"
    verbose_name = "Facility rentals"

    def ready(self) -> None:
        from rentals import signals  # noqa: F401
