import os

import django
import pytest


def pytest_configure(config):
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "storefront.settings")
    django.setup()


@pytest.fixture
def options():
    from pricing.domain import PricingOptions
    return PricingOptions.from_settings()


@pytest.fixture
def catalog():
    records = {
        "1": {"price": "30.00"},
        "2": {"price": 10},
        "3": {"price": "100", "discountType": "percentage", "discountValue": 10},
        "4": {"price": "5", "discountType": "fixed", "discountValue": "10"},
    }
    return records.get
