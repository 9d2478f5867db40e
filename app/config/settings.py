"""
Django settings for the mentor payments API.

This is the single settings file for all environments. Configuration is driven
by environment variables using django-environ, following the 12-factor app
methodology.

Environment files:
    - .env.development: Development settings (DEBUG=True, unverified webhooks)
    - .env.production: Production settings (DEBUG=False, signed webhooks only)
    - .env.example: Every variable, documented

Secrets (SECRET_KEY, Stripe keys) have no defaults. A missing Stripe key
is reported per request as "Payment service configuration error".

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/topics/settings/

For the full list of settings and their values, see:
https://docs.djangoproject.com/en/5.2/ref/settings/
"""

import os
from pathlib import Path

import environ
from corsheaders.defaults import default_headers

# =============================================================================
# Path Configuration
# =============================================================================
# Build paths inside the project: BASE_DIR / 'subdir'
BASE_DIR = Path(__file__).resolve().parent.parent

# =============================================================================
# Environment Configuration
# =============================================================================
# Initialize django-environ
env = environ.Env(
    # Set default values and casting for common settings
    DEBUG=(bool, False),  # Default to False for safety
    ALLOWED_HOSTS=(list, []),
    CORS_ALLOWED_ORIGINS=(list, []),
    LOG_LEVEL=(str, "INFO"),
    LOG_TO_FILE=(bool, False),
)

# Read environment file, defaulting to .env.development at the repo root
# Note: In containers, env vars are passed directly; .env files are for local dev
env_file = os.environ.get("ENV_FILE", BASE_DIR.parent / ".env.development")
if Path(env_file).exists():
    environ.Env.read_env(env_file)

# =============================================================================
# Core Settings
# =============================================================================
# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG")

ALLOWED_HOSTS = env("ALLOWED_HOSTS")

# =============================================================================
# Application Definition
# =============================================================================
INSTALLED_APPS = [
    # Django core apps
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
    # Third-party apps - REST & API docs
    "rest_framework",
    "corsheaders",
    "drf_spectacular",
    # Local apps
    "core",
    "payments",
]

MIDDLEWARE = [
    # Security middleware (should be first)
    "django.middleware.security.SecurityMiddleware",
    # CORS headers (must be before CommonMiddleware; answers preflight)
    "corsheaders.middleware.CorsMiddleware",
    # Django default middleware
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

# API paths have no trailing slash (/api/create-refund); don't redirect them
APPEND_SLASH = False

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

# =============================================================================
# Database Configuration
# =============================================================================
# No relational database: mentor records live in the document store below
DATABASES = {}

# =============================================================================
# Document Store Configuration
# =============================================================================
# Backend is a dotted path or one of the short names below.
# FIRESTORE_EMULATOR_HOST is read by google-cloud-firestore directly.
DOCUMENT_STORE_BACKENDS = {
    "firestore": "documents.backends.firestore.FirestoreDocumentStore",
    "locmem": "documents.backends.locmem.LocMemDocumentStore",
}
DOCUMENT_STORE_BACKEND = env("DOCUMENT_STORE_BACKEND", default="firestore")

DOCUMENT_STORE = {
    "BACKEND": DOCUMENT_STORE_BACKENDS.get(DOCUMENT_STORE_BACKEND, DOCUMENT_STORE_BACKEND),
    "OPTIONS": {
        "project": env("FIRESTORE_PROJECT_ID", default=""),
        "database": env("FIRESTORE_DATABASE", default="(default)"),
        # Service account JSON; Application Default Credentials when empty
        "credentials_file": env("FIRESTORE_CREDENTIALS_FILE", default=""),
    },
}

# =============================================================================
# Django REST Framework Configuration
# =============================================================================
REST_FRAMEWORK = {
    # The payment endpoints are called anonymously by the front-end
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    # Every error body is {"error": "<message>"}
    "EXCEPTION_HANDLER": "core.exception_handler.api_exception_handler",
    # OpenAPI schema generation
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

# =============================================================================
# drf-spectacular (OpenAPI) Configuration
# =============================================================================
SPECTACULAR_SETTINGS = {
    "TITLE": "Mentor Payments API",
    "DESCRIPTION": (
        "Stripe payment authorization, refunds, Connect onboarding and "
        "mentor balances for mentoring sessions"
    ),
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
    # Strip /api prefix from operation paths in tags
    "SCHEMA_PATH_PREFIX": r"/api",
    # Schema customization
    "COMPONENT_SPLIT_REQUEST": True,
    "SORT_OPERATIONS": False,
}

# =============================================================================
# CORS Configuration
# =============================================================================
# The front-end is served from another origin (or several preview origins);
# every /api/ response carries Access-Control-Allow-Origin: * unless an
# explicit allow-list is configured.
CORS_ALLOWED_ORIGINS = env("CORS_ALLOWED_ORIGINS")
CORS_ALLOW_ALL_ORIGINS = env.bool(
    "CORS_ALLOW_ALL_ORIGINS",
    default=not CORS_ALLOWED_ORIGINS,
)
CORS_URLS_REGEX = r"^/api/.*$"
CORS_ALLOW_HEADERS = (*default_headers, "stripe-signature")

# =============================================================================
# Stripe Configuration
# =============================================================================
# Get your API keys from: https://dashboard.stripe.com/apikeys
# Use test keys (sk_test_...) for development, live keys (sk_live_...) for production
STRIPE_SECRET_KEY = env("STRIPE_SECRET_KEY", default="")
STRIPE_PUBLISHABLE_KEY = env("STRIPE_PUBLISHABLE_KEY", default="")

# Webhook signing secret from: https://dashboard.stripe.com/webhooks
# Each webhook endpoint has its own signing secret
STRIPE_WEBHOOK_SECRET = env("STRIPE_WEBHOOK_SECRET", default="")

# Pin the API version sent with every request (empty = account default)
STRIPE_API_VERSION = env("STRIPE_API_VERSION", default="")

# API timeout in seconds (default: 10)
# Keep low for responsive error handling; increase if experiencing timeouts
STRIPE_API_TIMEOUT_SECONDS = env.int("STRIPE_API_TIMEOUT_SECONDS", default=10)

# Accept webhooks without a signature (or without a configured secret).
# SECURITY WARNING: development only; set False in production.
STRIPE_WEBHOOK_ALLOW_UNVERIFIED = env.bool("STRIPE_WEBHOOK_ALLOW_UNVERIFIED", default=True)

# =============================================================================
# Payments Configuration
# =============================================================================
PAYMENTS_DEFAULT_CURRENCY = env("PAYMENTS_DEFAULT_CURRENCY", default="usd")

# Connect onboarding
CONNECT_DEFAULT_COUNTRY = env("CONNECT_DEFAULT_COUNTRY", default="US")
# Path on the calling origin used as the onboarding refresh and return URL
CONNECT_ONBOARDING_PATH = env("CONNECT_ONBOARDING_PATH", default="/dashboard")
# Reject onboarding for mentor ids without a mentor document (404)
CONNECT_REQUIRE_MENTOR_RECORD = env.bool("CONNECT_REQUIRE_MENTOR_RECORD", default=False)

# Text on the mentor's bank statement for payouts (max 22 characters)
PAYOUT_STATEMENT_DESCRIPTOR = env("PAYOUT_STATEMENT_DESCRIPTOR", default="")

# =============================================================================
# API Client Configuration
# =============================================================================
# Backend origin for api_client (empty = same origin, relative URLs)
API_BASE_URL = env("API_BASE_URL", default="")
# True/False forces the mock or real client; unset probes /health/
API_CLIENT_USE_MOCKS = env.bool("API_CLIENT_USE_MOCKS", default=None)

# =============================================================================
# Internationalization
# =============================================================================
# https://docs.djangoproject.com/en/5.2/topics/i18n/
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# =============================================================================
# Static Files
# =============================================================================
# https://docs.djangoproject.com/en/5.2/howto/static-files/
STATIC_URL = env("STATIC_URL", default="/static/")
STATIC_ROOT = BASE_DIR / "staticfiles"

# =============================================================================
# Logging Configuration
# =============================================================================
LOG_LEVEL = env("LOG_LEVEL")

# File logging is opt-in; containers log to stdout
LOG_TO_FILE = env("LOG_TO_FILE")
LOG_FILE_NAME = env("LOG_FILE_NAME", default="django.log")
LOG_DIR = BASE_DIR / "logs"

LOG_HANDLERS = ["console"]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
        "file": {
            # Detailed format for persistent logs with timestamp, level, logger name, and location
            "format": "[{asctime}] {levelname} {name} {module}:{lineno} - {message}",
            "style": "{",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": LOG_HANDLERS,
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": LOG_HANDLERS,
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django.request": {
            "handlers": LOG_HANDLERS,
            "level": "ERROR",
            "propagate": False,
        },
        "stripe": {
            "handlers": LOG_HANDLERS,
            "level": "WARNING",
            "propagate": False,
        },
    },
}

if LOG_TO_FILE:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    LOGGING["handlers"]["file"] = {
        # Rotating file handler prevents unbounded disk usage
        # Max 10MB per file, keeps 5 backups
        "level": "DEBUG",
        "class": "logging.handlers.RotatingFileHandler",
        "filename": LOG_DIR / LOG_FILE_NAME,
        "maxBytes": 10 * 1024 * 1024,  # 10MB
        "backupCount": 5,
        "formatter": "file",
        "encoding": "utf-8",
    }
    LOG_HANDLERS.append("file")

# =============================================================================
# Security Settings (Production Only)
# =============================================================================
# These settings are enforced only when DEBUG=False
if not DEBUG:
    # HTTPS/SSL settings
    SECURE_SSL_REDIRECT = env.bool("SECURE_SSL_REDIRECT", default=True)
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")

    # Cookie security
    CSRF_COOKIE_SECURE = env.bool("CSRF_COOKIE_SECURE", default=True)

    # HSTS (HTTP Strict Transport Security)
    SECURE_HSTS_SECONDS = env.int("SECURE_HSTS_SECONDS", default=31536000)  # 1 year
    SECURE_HSTS_INCLUDE_SUBDOMAINS = env.bool(
        "SECURE_HSTS_INCLUDE_SUBDOMAINS", default=True
    )
    SECURE_HSTS_PRELOAD = env.bool("SECURE_HSTS_PRELOAD", default=True)

    # Additional security headers
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = "DENY"
