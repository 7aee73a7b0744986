from django.apps import AppConfig


class PlaygroundsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "playgrounds"

    def ready(self) -> None:
        from playgrounds import signals  # noqa: F401
