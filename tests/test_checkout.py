import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from django.test import override_settings

from pricing.cart_utils import build_line_items, get_cart_count
from pricing.checkout import price_cart
from pricing.domain import CouponReason, DiscountKind, PricingOptions
from pricing.exceptions import InvalidQuantity, ProductNotFound

COUPONS = {
    "SAVE10": {"code": "SAVE10", "discountType": "fixed", "discountValue": 10, "minPurchaseAmount": 100},
    "PCT15": {"code": "PCT15", "discountType": "percentage", "discountValue": 15},
    "OLD": {
        "code": "OLD",
        "discountType": "fixed",
        "discountValue": 5,
        "expiryDate": "2020-01-01T00:00:00Z",
    },
}

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


# -------------------------------
# cart helpers
# -------------------------------
def test_get_cart_count():
    assert get_cart_count({"1": 2, "2": "3"}) == 5
    assert get_cart_count({}) == 0
    assert get_cart_count(None) == 0


def test_build_line_items(catalog):
    items = build_line_items({1: 2, "3": "1"}, catalog)
    assert [i.product_id for i in items] == ["1", "3"]
    assert items[0].unit_price == Decimal("30.00")
    assert items[0].quantity == 2
    assert items[0].discount is None
    assert items[1].discount.kind is DiscountKind.PERCENTAGE


def test_build_line_items_missing_product(catalog):
    with pytest.raises(ProductNotFound):
        build_line_items({"99": 1}, catalog)


def test_build_line_items_bad_quantity(catalog):
    with pytest.raises(InvalidQuantity):
        build_line_items({"1": 0}, catalog)


# -------------------------------
# price_cart
# -------------------------------
def test_price_cart_without_coupon(catalog, options):
    totals = price_cart({"1": 2, "2": 1}, catalog, options=options, at=NOW)
    assert totals.subtotal == Decimal("70.00")
    assert totals.discount_applied == Decimal("0.00")
    assert totals.total == Decimal("70.00")
    assert totals.coupon_reason is None


def test_price_cart_with_item_discounts(catalog, options):
    totals = price_cart({"3": 1, "4": 2}, catalog, options=options, at=NOW)
    assert totals.subtotal == Decimal("90.00")


def test_price_cart_applies_coupon_by_normalised_code(catalog, options):
    looked_up = []

    def coupon_lookup(code):
        looked_up.append(code)
        return COUPONS.get(code)

    totals = price_cart({"1": 4}, catalog, " pct15 ", coupon_lookup, options=options, at=NOW)
    assert looked_up == ["PCT15"]
    assert totals.subtotal == Decimal("120.00")
    assert totals.discount_applied == Decimal("18.00")
    assert totals.total == Decimal("102.00")


def test_price_cart_reports_minimum_not_met(catalog, options, caplog):
    with caplog.at_level(logging.INFO, logger="pricing.checkout"):
        totals = price_cart({"1": 1}, catalog, "SAVE10", COUPONS.get, options=options, at=NOW)
    assert totals.total == Decimal("30.00")
    assert totals.coupon_reason == CouponReason.MIN_PURCHASE_NOT_MET
    assert "min_purchase_not_met" in caplog.text


def test_price_cart_unknown_coupon(catalog, options):
    totals = price_cart({"1": 1}, catalog, "NOPE", COUPONS.get, options=options, at=NOW)
    assert totals.total == Decimal("30.00")
    assert totals.coupon_reason == CouponReason.NOT_FOUND


def test_price_cart_expired_coupon(catalog, options):
    totals = price_cart({"1": 1}, catalog, "OLD", COUPONS.get, options=options, at=NOW)
    assert totals.coupon_reason == CouponReason.EXPIRED
    assert totals.discount_applied == 0


def test_price_cart_uses_clock_when_no_timestamp(catalog, options):
    totals = price_cart({"1": 1}, catalog, "OLD", COUPONS.get, options=options)
    assert totals.coupon_reason == CouponReason.EXPIRED


def test_price_cart_ignores_code_without_lookup(catalog, options):
    totals = price_cart({"1": 1}, catalog, "SAVE10", options=options, at=NOW)
    assert totals.coupon_reason is None
    assert totals.total == Decimal("30.00")


def test_price_cart_reads_settings_by_default():
    with override_settings(PRICING={"QUANTUM": "1", "ROUNDING": "ROUND_DOWN"}):
        totals = price_cart({"3": 1}, {"3": {"price": "99.99"}}.get, at=NOW)
    assert totals.total == Decimal("99")


def test_price_cart_empty_cart(catalog, options):
    totals = price_cart({}, catalog, options=options, at=NOW)
    assert totals.subtotal == totals.total == Decimal("0.00")


def test_options_fixture_comes_from_project_settings(options):
    assert isinstance(options, PricingOptions)
    assert options.currency == "DZD"
    assert "USD" in options.exchange_rates


def test_price_cart_with_naive_expiry(catalog, options):
    coupons = {"LATER": {"code": "LATER", "discountType": "fixed", "discountValue": 5, "expiryDate": "2030-01-01T00:00:00"}}
    totals = price_cart({"1": 1}, catalog, "LATER", coupons.get, options=options, at=NOW)
    assert totals.coupon_reason is None
    assert totals.total == Decimal("25.00")
