# pricing/money.py
from decimal import Decimal, InvalidOperation

from .exceptions import InvalidPrice, UnknownCurrency, errmsg

ZERO = Decimal('0.00')


def to_decimal(value):
    """
    Coerce a number or numeric string to Decimal.
    Floats go through str() so 19.99 stays 19.99 instead of its binary expansion.
    """
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidPrice(errmsg.PRICE_NOT_NUMERIC % (value,))
        return value
    if isinstance(value, bool):
        raise InvalidPrice(errmsg.PRICE_NOT_NUMERIC % (value,))
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidPrice(errmsg.PRICE_NOT_NUMERIC % (value,))
    if not result.is_finite():
        raise InvalidPrice(errmsg.PRICE_NOT_NUMERIC % (value,))
    return result


def quantize(amount, options):
    return to_decimal(amount).quantize(options.quantum, rounding=options.rounding)


def to_money(amount, options):
    """
    Quantize and clamp at zero. Every amount the engine hands back goes through here.
    """
    result = quantize(amount, options)
    if result <= 0:
        return ZERO.quantize(options.quantum)
    return result


def convert(amount, currency, options):
    """
    Convert a base-currency amount using options.exchange_rates,
    expressed as base units per one unit of `currency`.
    """
    if currency == options.currency:
        return to_money(amount, options)
    try:
        rate = options.exchange_rates[currency]
    except KeyError:
        raise UnknownCurrency(errmsg.UNKNOWN_CURRENCY % (currency,))
    return to_money(to_decimal(amount) / rate, options)
