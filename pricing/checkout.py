# pricing/checkout.py
import logging
from dataclasses import replace

from django.utils import timezone

from .boundary import normalize_coupon_code, parse_coupon
from .cart_utils import build_line_items
from .domain import CouponReason, PricingOptions
from .engine import compute_totals

logger = logging.getLogger(__name__)


def price_cart(cart, catalog_lookup, coupon_code=None, coupon_lookup=None, options=None, at=None):
    """
    Price a session cart end to end.

    `catalog_lookup(product_id)` and `coupon_lookup(code)` are supplied by the
    caller and return raw records (or None when nothing matches). Settings and
    the clock are read here, once, and passed into the engine.
    """
    if options is None:
        options = PricingOptions.from_settings()
    if at is None:
        at = timezone.now()

    items = build_line_items(cart, catalog_lookup)

    coupon = None
    code = normalize_coupon_code(coupon_code)
    if code and coupon_lookup is not None:
        record = coupon_lookup(code)
        if record is None:
            logger.info("Coupon %s not found", code)
            totals = compute_totals(items, None, options, at)
            return replace(totals, coupon_reason=CouponReason.NOT_FOUND)
        coupon = parse_coupon(record)

    totals = compute_totals(items, coupon, options, at)

    if totals.coupon_reason is not None:
        logger.info("Coupon %s not applied: %s", code, totals.coupon_reason.value)
    logger.debug(
        "Priced cart with %s lines: subtotal=%s discount=%s total=%s %s",
        len(items), totals.subtotal, totals.discount_applied, totals.total, options.currency,
    )
    return totals
