# pricing/boundary.py
"""
Validation of raw catalog, coupon and cart records before they reach the engine.

Records arrive as plain dicts from the catalog and coupon lookups, using the
storefront's camelCase field names (snake_case is accepted as well).
"""
import logging
from datetime import datetime

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from .domain import Coupon, DiscountDescriptor, DiscountKind
from .exceptions import (
    InvalidDiscount,
    InvalidPrice,
    InvalidQuantity,
    PricingError,
    errmsg,
)
from .money import to_decimal

logger = logging.getLogger(__name__)


def _field(record, camel, snake, default=None):
    if camel in record:
        return record[camel]
    return record.get(snake, default)


def normalize_coupon_code(code):
    return (code or '').strip().upper()


def parse_price(value):
    if value is None or value == '':
        raise InvalidPrice(errmsg.PRICE_REQUIRED)
    price = to_decimal(value)
    if price < 0:
        raise InvalidPrice(errmsg.PRICE_NEGATIVE % price)
    return price


def parse_quantity(value):
    # session carts store quantities as ints or numeric strings
    if isinstance(value, bool):
        raise InvalidQuantity(errmsg.QUANTITY_NOT_INTEGER % (value,))
    try:
        quantity = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidQuantity(errmsg.QUANTITY_NOT_INTEGER % (value,))
    if not isinstance(value, str) and value != quantity:
        raise InvalidQuantity(errmsg.QUANTITY_NOT_INTEGER % (value,))
    if quantity < 1:
        raise InvalidQuantity(errmsg.QUANTITY_POSITIVE % (quantity,))
    return quantity


def _discount_value(value):
    try:
        amount = to_decimal(value)
    except PricingError:
        raise InvalidDiscount(errmsg.DISCOUNT_NOT_NUMERIC % (value,))
    if amount < 0:
        raise InvalidDiscount(errmsg.DISCOUNT_NEGATIVE % amount)
    return amount


def parse_discount(kind, value):
    """
    Returns a DiscountDescriptor, or None when the record carries no usable discount.
    Unknown kinds are logged and dropped rather than blocking the sale.
    """
    if not kind or value is None or value == '':
        return None
    amount = _discount_value(value)
    try:
        kind = DiscountKind(kind)
    except ValueError:
        logger.warning("Dropping discount with unknown kind %r", kind)
        return None
    if amount == 0:
        return None
    return DiscountDescriptor(kind, amount)


def parse_catalog_item(record):
    """
    Catalog lookup record -> (price, discount).
    """
    price = parse_price(record.get('price'))
    discount = parse_discount(
        _field(record, 'discountType', 'discount_type'),
        _field(record, 'discountValue', 'discount_value'),
    )
    return price, discount


def _parse_expiry(value):
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = parse_datetime(value)
        except (TypeError, ValueError):
            parsed = None
        if parsed is None:
            raise InvalidDiscount("Coupon expiry date is not a datetime: %r" % (value,))
    # naive expiries are read in the project time zone
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def _parse_count(value, name):
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise InvalidDiscount(errmsg.COUNT_NOT_INTEGER % (name, value))
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidDiscount(errmsg.COUNT_NOT_INTEGER % (name, value))
    if not isinstance(value, str) and value != count:
        raise InvalidDiscount(errmsg.COUNT_NOT_INTEGER % (name, value))
    if count < 0:
        raise InvalidDiscount(errmsg.COUNT_NEGATIVE % (name, count))
    return count


def _parse_flag(value):
    # records coming from query strings or forms carry booleans as text
    if isinstance(value, str):
        return value.strip().lower() not in ('', '0', 'false', 'no', 'off')
    return bool(value)


def parse_coupon(record):
    """
    Coupon lookup record -> Coupon. A coupon without a recognised discount
    type is malformed data and raises InvalidDiscount.
    """
    kind = _field(record, 'discountType', 'discount_type')
    try:
        kind = DiscountKind(kind)
    except ValueError:
        raise InvalidDiscount(errmsg.INVALID_COUPON_TYPE % (kind,))

    value = _field(record, 'discountValue', 'discount_value')
    if value is None or value == '':
        raise InvalidDiscount(errmsg.COUPON_VALUE_REQUIRED)

    min_purchase = _field(record, 'minPurchaseAmount', 'min_purchase_amount')
    if min_purchase is not None and min_purchase != '':
        min_purchase = parse_price(min_purchase)
    else:
        min_purchase = None

    usage_count = _parse_count(_field(record, 'usageCount', 'usage_count'), 'usageCount')

    return Coupon(
        discount_type=kind,
        discount_value=_discount_value(value),
        min_purchase_amount=min_purchase,
        code=normalize_coupon_code(record.get('code')) or None,
        is_active=_parse_flag(_field(record, 'isActive', 'is_active', True)),
        expires_at=_parse_expiry(_field(record, 'expiryDate', 'expires_at')),
        max_usage_count=_parse_count(_field(record, 'maxUsageCount', 'max_usage_count'), 'maxUsageCount'),
        usage_count=usage_count or 0,
    )
