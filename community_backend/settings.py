"""
settings.py — Django project configuration for the Community Backend

What this file configures
===============================================================================
- Core Django wiring (INSTALLED_APPS, MIDDLEWARE, TEMPLATES, DB)
- REST Framework defaults (JWT auth, IsAuthenticated, filtering, pagination)
- SimpleJWT (access/refresh) + blacklist app (logout invalidates refresh)
- CORS for FE ↔ BE requests
- Sessions: the visitor's browser-local display state (closed announcements,
  minimized flags, floating button position, visitor id) lives in the session
- Push relay client settings (URL, admin API key, timeout, dedup window)
- Production serving of static via WhiteNoise
- Swagger (drf-yasg) configured to use Bearer tokens in the Authorize dialog
- CSP (django-csp v4) `frame-ancestors` limited to the site and the frontend

How environment variables drive behavior (deployment-safe)
===============================================================================
DJANGO_DEBUG              -> Enables dev mode when true. Defaults to True locally.
DJANGO_SECRET_KEY         -> Required when DJANGO_DEBUG=False (production).
DJANGO_ALLOWED_HOSTS      -> Comma-separated list of allowed hostnames in prod.
CORS_ALLOW_ALL_ORIGINS    -> Dev toggle to allow any origin (default True in dev).
CORS_ALLOWED_ORIGINS      -> Comma-separated list of exact origins (prod).
FRONTEND_URL              -> Public website; "/" redirects here.
SITE_URL                  -> URL opened by notification clicks (defaults to FRONTEND_URL).
SITE_NAME                 -> Default notification title / banner wording.
PUSH_RELAY_URL            -> Base URL of the push relay (store-token, send-push, ...).
PUSH_API_KEY              -> Bearer key for the relay's admin operations.
PUSH_RELAY_TIMEOUT        -> Seconds before a relay call is abandoned (default 10).
NOTIFICATION_TAG          -> OS notification tag; same tag replaces, never stacks.
PUSH_DEDUP_WINDOW_SECONDS -> Duplicate push suppression window (default 5).
ANON_THROTTLE_RATE        -> DRF anon throttle (default 60/min; visitors poll /active/).
LOG_LEVEL                 -> Level for the app loggers (default INFO).

Why some ordering matters
===============================================================================
- We compute DEBUG first so SECRET_KEY can enforce “prod requires a key.”
- SECRET_KEY only falls back to a dev key when DEBUG=True.
- FRONTEND_URL is read before CORS/CSRF/CSP so their defaults derive from it.

Deployment notes (Render-friendly)
===============================================================================
- Build command example:
    pip install . && python manage.py collectstatic --noinput && python manage.py migrate --noinput
- Start command example:
    gunicorn community_backend.wsgi:application --log-file -
- Minimal env vars:
    DJANGO_SECRET_KEY=<random>
    DJANGO_DEBUG=False
    DJANGO_ALLOWED_HOSTS=<your-service>.onrender.com
    FRONTEND_URL=https://<your-site>
    PUSH_RELAY_URL=https://<your-relay>
    PUSH_API_KEY=<relay admin key>
"""

from pathlib import Path
from datetime import timedelta
from urllib.parse import urlparse
import os
import sys


# ---------------------------
# Helpers for env parsing
# ---------------------------
def _get_bool(env_key: str, default: bool = False) -> bool:
    """Parse booleans from env like '1', 'true', 'yes'."""
    raw = os.environ.get(env_key, str(default))
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}

def _get_list(env_key: str, default=None):
    """Parse comma-separated lists from env (e.g., 'a.com,b.com')."""
    if default is None:
        default = []
    raw = os.environ.get(env_key)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]

def _get_float(env_key: str, default: float) -> float:
    """Parse a float from env, falling back to the default on junk."""
    try:
        return float(os.environ.get(env_key, default))
    except (TypeError, ValueError):
        return default

def _origin_from(url: str) -> str:
    """Turn a full URL into an origin string (scheme://host[:port])."""
    p = urlparse(url or "")
    if not p.scheme or not p.hostname:
        return ""
    return f"{p.scheme}://{p.hostname}" + (f":{p.port}" if p.port else "")


BASE_DIR = Path(__file__).resolve().parent.parent

# Reads DJANGO_DEBUG from env. Defaults to True for dev.
DEBUG = _get_bool("DJANGO_DEBUG", True)

# pytest-django imports settings without "test" in argv
TESTING = "test" in sys.argv or "pytest" in sys.modules


# --- Frontend URL & CORS/CSRF (dev-friendly defaults) ---
# Root redirect will send "/" here (see urls.py).
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173/")

# Dev CORS toggle (allow all while DEBUG=True unless overridden by env).
CORS_ALLOW_ALL_ORIGINS = _get_bool("CORS_ALLOW_ALL_ORIGINS", DEBUG)

# The public site sends the session cookie with display-state calls.
CORS_ALLOW_CREDENTIALS = True

CORS_ALLOWED_ORIGINS = _get_list("CORS_ALLOWED_ORIGINS", [])
if not CORS_ALLOWED_ORIGINS and FRONTEND_URL:
    derived = _origin_from(FRONTEND_URL)
    if derived:
        CORS_ALLOWED_ORIGINS = [derived]

CSRF_TRUSTED_ORIGINS = _get_list("CSRF_TRUSTED_ORIGINS", [])
if not CSRF_TRUSTED_ORIGINS and FRONTEND_URL:
    derived = _origin_from(FRONTEND_URL)
    if derived:
        CSRF_TRUSTED_ORIGINS = [derived]

CORS_ALLOWED_ORIGIN_REGEXES = _get_list("CORS_ALLOWED_ORIGIN_REGEXES", [])

# --- Framing ---------------------------------------------------------------
_frontend_origin = _origin_from(FRONTEND_URL) if FRONTEND_URL else ""
_allowed_ancestors = set(["'self'"])

if _frontend_origin:
    _allowed_ancestors.add(_frontend_origin)

for o in CORS_ALLOWED_ORIGINS:
    if o:
        _allowed_ancestors.add(o)

# django-csp v4+ format:
CONTENT_SECURITY_POLICY = {
    "DIRECTIVES": {
        "frame-ancestors": sorted(_allowed_ancestors),
    }
}


# SECRET_KEY with safe production enforcement
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY") or (
    "django-insecure-7h$k2q!community-dev-only-key-0c9e4f1d8b3a6" if DEBUG else None
)
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY must be set when DJANGO_DEBUG=False")


# Hosts from env (defaults depend on DEBUG)
ALLOWED_HOSTS = _get_list("DJANGO_ALLOWED_HOSTS", [] if DEBUG else ["127.0.0.1"])


# --- Site & push relay -----------------------------------------------------
SITE_URL = os.environ.get("SITE_URL", FRONTEND_URL)
SITE_NAME = os.environ.get("SITE_NAME", "Community Center")

PUSH_RELAY_URL = os.environ.get("PUSH_RELAY_URL", "").strip().rstrip("/")
PUSH_API_KEY = os.environ.get("PUSH_API_KEY", "").strip()
PUSH_RELAY_TIMEOUT = _get_float("PUSH_RELAY_TIMEOUT", 10.0)

NOTIFICATION_TAG = os.environ.get("NOTIFICATION_TAG", "site-announcement")
PUSH_DEDUP_WINDOW_SECONDS = _get_float("PUSH_DEDUP_WINDOW_SECONDS", 5.0)


INSTALLED_APPS = [
    # Django core
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third-party
    'rest_framework',
    'corsheaders',
    'django_filters',                             # filtering backend for DRF
    'drf_yasg',                                   # Swagger/OpenAPI docs
    'rest_framework_simplejwt.token_blacklist',   # refresh-token blacklist

    # Local apps
    'accounts',
    'announcements',
    'notifications',
    'csp',
]

SWAGGER_SETTINGS = {
    "USE_SESSION_AUTH": False,  # hide Django session login in the docs
    "SECURITY_DEFINITIONS": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Paste: Bearer <access-token>",
        }
    },
}

MIDDLEWARE = [
    # CORS should be as high as possible
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',

    'django.middleware.security.SecurityMiddleware',
    "csp.middleware.CSPMiddleware",
    'whitenoise.middleware.WhiteNoiseMiddleware',  # Serves static in prod
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_FILTER_BACKENDS": (
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.SearchFilter",
        "rest_framework.filters.OrderingFilter",
    ),
    "DEFAULT_PAGINATION_CLASS": "rest_framework.pagination.PageNumberPagination",
    "PAGE_SIZE": 20,
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "DEFAULT_THROTTLE_CLASSES": [ "rest_framework.throttling.AnonRateThrottle" ],
    "DEFAULT_THROTTLE_RATES": {"anon": os.environ.get("ANON_THROTTLE_RATE", "60/min")},
}

# Disable throtting when running tests
if TESTING:
    REST_FRAMEWORK[ "DEFAULT_THROTTLE_CLASSES"] = []
    REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

# JWT lifetimes
SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=6),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
}

# Display state is advisory UI memory; keep it for a long while per browser.
SESSION_COOKIE_AGE = 60 * 60 * 24 * 365
SESSION_COOKIE_SAMESITE = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
SESSION_COOKIE_SECURE = not DEBUG

ROOT_URLCONF = 'community_backend.urls'
WSGI_APPLICATION = 'community_backend.wsgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]


# --- Database (Postgres when DATABASE_URL set; SQLite otherwise) ---
import dj_database_url

DB_URL = os.environ.get("DATABASE_URL", "").strip()
IS_POSTGRES = DB_URL.startswith("postgres://") or DB_URL.startswith("postgresql://")

if DB_URL:
    DATABASES = {
        "default": dj_database_url.parse(
            DB_URL,
            conn_max_age=600,
            ssl_require=IS_POSTGRES,  # only apply SSL flag for Postgres URLs
        )
    }
else:
    # Default to SQLite for local dev/CI
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }


AUTHENTICATION_BACKENDS = [
    "django.contrib.auth.backends.ModelBackend",
]

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

# Static
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "[{levelname}] {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "django.request": {  # 500s, 404s with exceptions
            "handlers": ["console"],
            "level": "ERROR",
            "propagate": True,
        },
        "django": {
            "handlers": ["console"],
            "level": "INFO",
        },
        "accounts": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "announcements": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "notifications": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
    },
}
