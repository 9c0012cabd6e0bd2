from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured
import logging

logger = logging.getLogger(__name__)


class PricingConfig(AppConfig):
    name = "pricing"

    def ready(self):
        """
        On startup, validate the PRICING settings once.
        If they are broken, log the error but don't crash the app;
        price_cart will raise the same error when it is first called.
        """
        from .domain import PricingOptions

        try:
            options = PricingOptions.from_settings()
            logger.info(
                "Pricing configured: currency=%s quantum=%s rounding=%s",
                options.currency, options.quantum, options.rounding,
            )
        except ImproperlyConfigured as e:
            logger.error("Pricing settings are invalid: %s", e)
