# pricing/exceptions.py


class errmsg:
    """Error message constants for the pricing domain."""

    QUANTITY_NOT_INTEGER = "Quantity must be a whole number, got %r"
    QUANTITY_POSITIVE = "Quantity must be at least 1, got %r"
    PRICE_NOT_NUMERIC = "Price must be a number, got %r"
    PRICE_REQUIRED = "Price is required"
    PRICE_NEGATIVE = "Price cannot be negative, got %s"
    DISCOUNT_NOT_NUMERIC = "Discount value must be a number, got %r"
    DISCOUNT_NEGATIVE = "Discount value cannot be negative, got %s"
    INVALID_COUPON_TYPE = "Invalid coupon discount type %r"
    COUPON_VALUE_REQUIRED = "Coupon discount value is required"
    COUNT_NOT_INTEGER = "Coupon %s must be a whole number, got %r"
    COUNT_NEGATIVE = "Coupon %s cannot be negative, got %s"
    PRODUCT_NOT_FOUND = "Product %s does not exist"
    UNKNOWN_CURRENCY = "No exchange rate configured for %s"


class PricingError(Exception):
    """Base class for pricing failures the caller must handle."""


class InvalidQuantity(PricingError):
    pass


class InvalidPrice(PricingError):
    pass


class InvalidDiscount(PricingError):
    pass


class ProductNotFound(PricingError):
    pass


class UnknownCurrency(PricingError):
    pass
