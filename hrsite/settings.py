from __future__ import annotations

import os
from pathlib import Path

import reportlab

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.environ.get(name, default).split(",") if item.strip()]


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-hrportal-secret-key")
DEBUG = _env_bool("DJANGO_DEBUG", True)
ALLOWED_HOSTS = _env_list("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "hrportal",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "hrsite.urls"
WSGI_APPLICATION = "hrsite.wsgi.application"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

# Submissions are transient; nothing is persisted beyond the upload directory.
DATABASES: dict = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

HRPORTAL_UPLOAD_DIR = Path(os.environ.get("HRPORTAL_UPLOAD_DIR", BASE_DIR / "uploads"))

_font_dir = os.environ.get("HRPORTAL_FONT_DIR")
if _font_dir:
    HRPORTAL_FONT_FAMILY = {
        "name": "Roboto",
        "normal": Path(_font_dir) / "Roboto-Regular.ttf",
        "bold": Path(_font_dir) / "Roboto-Medium.ttf",
        "italic": Path(_font_dir) / "Roboto-Italic.ttf",
        "bold_italic": Path(_font_dir) / "Roboto-MediumItalic.ttf",
    }
else:
    _vera_dir = Path(reportlab.__file__).resolve().parent / "fonts"
    HRPORTAL_FONT_FAMILY = {
        "name": "Vera",
        "normal": _vera_dir / "Vera.ttf",
        "bold": _vera_dir / "VeraBd.ttf",
        "italic": _vera_dir / "VeraIt.ttf",
        "bold_italic": _vera_dir / "VeraBI.ttf",
    }

_asset_dir = BASE_DIR / "hrportal" / "assets" / "offer_letter"
HRPORTAL_OFFER_ASSETS = {
    "logo": _asset_dir / "logo.png",
    "text_logo": _asset_dir / "text-logo.png",
    "badge": _asset_dir / "type-badge.png",
    "footer": _asset_dir / "footer.png",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "console": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
        },
    },
    "loggers": {
        "hrportal": {
            "handlers": ["console"],
            "level": os.environ.get("HRPORTAL_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
