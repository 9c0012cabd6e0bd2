# pricing/engine.py
"""
Pure pricing functions.

Nothing here reads settings, the clock or the database: callers pass
PricingOptions (and a timestamp for coupon expiry) explicitly.
"""
import logging
from decimal import Decimal

from .domain import (
    CouponReason,
    CouponResult,
    DiscountKind,
    OrderTotals,
    PricingOptions,
)
from .exceptions import InvalidQuantity, errmsg
from .money import ZERO, quantize, to_decimal, to_money

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS = PricingOptions()
HUNDRED = Decimal(100)


def _discounted(amount, discount):
    if discount is None or discount.value is None:
        return amount
    value = to_decimal(discount.value)
    if value <= 0:
        return amount

    if discount.kind == DiscountKind.PERCENTAGE:
        return amount - (amount * value / HUNDRED)
    elif discount.kind == DiscountKind.FIXED:
        return amount - value

    logger.debug("Ignoring unrecognised discount kind %r", discount.kind)
    return amount


# -------------------------------
# UNIT / LINE / SUBTOTAL
# -------------------------------
def effective_price(base_price, discount=None, options=None):
    """
    Unit price after an item-level discount, never below zero.
    """
    options = options or DEFAULT_OPTIONS
    return to_money(_discounted(to_decimal(base_price), discount), options)


def check_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(errmsg.QUANTITY_NOT_INTEGER % (quantity,))
    if quantity < 1:
        raise InvalidQuantity(errmsg.QUANTITY_POSITIVE % (quantity,))
    return quantity


def line_total(item, options=None):
    options = options or DEFAULT_OPTIONS
    quantity = check_quantity(item.quantity)
    unit = effective_price(item.unit_price, item.discount, options)
    return to_money(unit * quantity, options)


def subtotal(items, options=None):
    """
    Sum of line totals. Raises on the first invalid item, so no partial
    subtotal ever reaches the caller.
    """
    options = options or DEFAULT_OPTIONS
    total = ZERO
    for item in items:
        total += line_total(item, options)
    return quantize(total, options)


# -------------------------------
# COUPONS
# -------------------------------
def coupon_eligibility(subtotal_amount, coupon, at=None):
    """
    Returns the CouponReason that blocks `coupon`, or None when it applies.
    Expiry is only checked when `at` is given.
    """
    if not coupon.is_active:
        return CouponReason.INACTIVE
    if at is not None and coupon.expires_at is not None and at > coupon.expires_at:
        return CouponReason.EXPIRED
    if coupon.max_usage_count is not None and coupon.usage_count >= coupon.max_usage_count:
        return CouponReason.USAGE_LIMIT_REACHED
    if coupon.min_purchase_amount is not None:
        if to_decimal(subtotal_amount) < to_decimal(coupon.min_purchase_amount):
            return CouponReason.MIN_PURCHASE_NOT_MET
    return None


def apply_coupon(subtotal_amount, coupon=None, options=None, at=None):
    options = options or DEFAULT_OPTIONS
    amount = to_money(subtotal_amount, options)

    if coupon is None:
        return CouponResult(discount_applied=ZERO.quantize(options.quantum), total=amount)

    reason = coupon_eligibility(amount, coupon, at)
    if reason is not None:
        return CouponResult(
            discount_applied=ZERO.quantize(options.quantum),
            total=amount,
            eligible=False,
            reason=reason,
        )

    total = to_money(_discounted(amount, coupon.discount), options)
    return CouponResult(discount_applied=amount - total, total=total)


def compute_totals(items, coupon=None, options=None, at=None):
    options = options or DEFAULT_OPTIONS
    amount = subtotal(items, options)
    result = apply_coupon(amount, coupon, options, at)
    return OrderTotals(
        subtotal=amount,
        discount_applied=result.discount_applied,
        total=result.total,
        coupon_reason=result.reason,
    )


# -------------------------------
# DISPLAY HELPERS
# -------------------------------
def discount_percent(original_price, price):
    """
    Whole percent saved against an earlier ("was") price, for catalog badges.
    """
    if original_price is None:
        return 0
    original = to_decimal(original_price)
    current = to_decimal(price)
    if original > 0 and original > current:
        return int(((original - current) / original) * 100)
    return 0
