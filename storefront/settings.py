import os

# Pricing runs inside the storefront project; only the settings it reads live here.
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-dev-key")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"

INSTALLED_APPS = [
    "pricing",
]

USE_TZ = True
TIME_ZONE = "UTC"

# ------------------------------
# PRICING
# ------------------------------
DZD_PER_USD = os.environ.get("DZD_PER_USD", "135")

PRICING = {
    "QUANTUM": "0.01",
    "ROUNDING": os.environ.get("PRICING_ROUNDING", "ROUND_HALF_UP"),
    "CURRENCY": "DZD",
    "EXCHANGE_RATES": {"USD": DZD_PER_USD},
}

# ------------------------------
# LOGGING
# ------------------------------
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "pricing": {
            "handlers": ["console"],
            "level": os.environ.get("PRICING_LOG_LEVEL", "INFO"),
        },
    },
}
