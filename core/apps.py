from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'core'
    report_registry = None

    def ready(self):
        """Build the report template registry once the apps are loaded."""
        from reports import build_registry

        self.report_registry = build_registry()
