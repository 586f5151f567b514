from django.apps import AppConfig


class HrPortalConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hrportal"
    verbose_name = "HR Portal"
