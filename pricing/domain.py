# pricing/domain.py
import decimal
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

ROUNDING_MODES = {
    name: getattr(decimal, name)
    for name in (
        'ROUND_HALF_UP', 'ROUND_HALF_EVEN', 'ROUND_HALF_DOWN',
        'ROUND_UP', 'ROUND_DOWN', 'ROUND_CEILING', 'ROUND_FLOOR',
    )
}


# ------------------------------
# CONFIGURATION
# ------------------------------
@dataclass(frozen=True)
class PricingOptions:
    quantum: Decimal = Decimal('0.01')
    rounding: str = decimal.ROUND_HALF_UP
    currency: str = 'DZD'
    exchange_rates: Mapping[str, Decimal] = field(default_factory=dict)

    @classmethod
    def from_settings(cls):
        """
        Build options from the PRICING dict in Django settings.
        Missing keys keep their defaults.
        """
        conf = getattr(settings, 'PRICING', None) or {}
        defaults = cls()

        try:
            quantum = Decimal(str(conf.get('QUANTUM', defaults.quantum)))
        except decimal.InvalidOperation:
            raise ImproperlyConfigured("PRICING['QUANTUM'] must be a decimal, got %r" % (conf.get('QUANTUM'),))
        if not quantum.is_finite() or quantum <= 0:
            raise ImproperlyConfigured("PRICING['QUANTUM'] must be positive, got %s" % quantum)
        # Decimal.quantize only honours the exponent, so 0.05 would round to cents
        if quantum.normalize().as_tuple().digits != (1,):
            raise ImproperlyConfigured("PRICING['QUANTUM'] must be a power of ten, got %s" % quantum)

        rounding_name = conf.get('ROUNDING', 'ROUND_HALF_UP')
        if rounding_name not in ROUNDING_MODES:
            raise ImproperlyConfigured("PRICING['ROUNDING'] must be one of %s" % ', '.join(sorted(ROUNDING_MODES)))

        rates = {}
        for code, rate in (conf.get('EXCHANGE_RATES') or {}).items():
            try:
                rates[code] = Decimal(str(rate))
            except decimal.InvalidOperation:
                raise ImproperlyConfigured("Exchange rate for %s is not a decimal: %r" % (code, rate))
            if not rates[code].is_finite() or rates[code] <= 0:
                raise ImproperlyConfigured("Exchange rate for %s must be positive" % code)

        return cls(
            quantum=quantum,
            rounding=ROUNDING_MODES[rounding_name],
            currency=conf.get('CURRENCY', defaults.currency),
            exchange_rates=rates,
        )


# ------------------------------
# DISCOUNTS
# ------------------------------
class DiscountKind(str, Enum):
    PERCENTAGE = 'percentage'
    FIXED = 'fixed'


@dataclass(frozen=True)
class DiscountDescriptor:
    # kind is usually a DiscountKind; the engine treats any other value as no discount
    kind: str
    value: Optional[Decimal] = None


# ------------------------------
# LINE ITEMS
# ------------------------------
@dataclass(frozen=True)
class LineItem:
    unit_price: Decimal
    quantity: int = 1
    discount: Optional[DiscountDescriptor] = None
    product_id: Optional[str] = None


# ------------------------------
# COUPONS
# ------------------------------
class CouponReason(str, Enum):
    MIN_PURCHASE_NOT_MET = 'min_purchase_not_met'
    INACTIVE = 'inactive'
    EXPIRED = 'expired'
    USAGE_LIMIT_REACHED = 'usage_limit_reached'
    NOT_FOUND = 'not_found'


@dataclass(frozen=True)
class Coupon:
    discount_type: str
    discount_value: Decimal
    min_purchase_amount: Optional[Decimal] = None
    code: Optional[str] = None
    is_active: bool = True
    expires_at: Optional[datetime] = None
    max_usage_count: Optional[int] = None
    usage_count: int = 0

    @property
    def discount(self):
        return DiscountDescriptor(self.discount_type, self.discount_value)


@dataclass(frozen=True)
class CouponResult:
    discount_applied: Decimal
    total: Decimal
    eligible: bool = True
    reason: Optional[CouponReason] = None


# ------------------------------
# ORDER TOTALS
# ------------------------------
@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    discount_applied: Decimal
    total: Decimal
    coupon_reason: Optional[CouponReason] = None

    @property
    def coupon_applied(self):
        return self.discount_applied > 0
