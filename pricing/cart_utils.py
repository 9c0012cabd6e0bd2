# pricing/cart_utils.py
from .boundary import parse_catalog_item, parse_quantity
from .domain import LineItem
from .exceptions import ProductNotFound, errmsg


def get_cart_count(cart):
    """
    Returns the total item count in a {product_id: quantity} session cart.
    """
    cart = cart or {}
    return sum(parse_quantity(q) for q in cart.values())


def build_line_items(cart, catalog_lookup):
    """
    One LineItem per cart entry. `catalog_lookup(product_id)` returns the
    catalog record ({price, discountType, discountValue}) or None.
    """
    items = []
    for product_id, quantity in (cart or {}).items():
        product_id = str(product_id)
        record = catalog_lookup(product_id)
        if record is None:
            raise ProductNotFound(errmsg.PRODUCT_NOT_FOUND % product_id)
        price, discount = parse_catalog_item(record)
        items.append(LineItem(
            unit_price=price,
            quantity=parse_quantity(quantity),
            discount=discount,
            product_id=product_id,
        ))
    return items
