from boutique.db.functions.cart import add_product_to_cart, clear_user_cart, get_cart_items
from boutique.db.functions.catalog import (
    count_products,
    create_product,
    delete_product,
    get_all_categories,
    get_all_products,
    get_product_by_id,
    update_product,
)
from boutique.db.functions.orders import count_orders, create_order, get_order_with_items, get_user_orders
from boutique.db.functions.users import count_users, create_user, get_user_by_email, get_user_by_id, update_profile

__all__ = [
    "add_product_to_cart",
    "clear_user_cart",
    "count_orders",
    "count_products",
    "count_users",
    "create_order",
    "create_product",
    "create_user",
    "delete_product",
    "get_all_categories",
    "get_all_products",
    "get_cart_items",
    "get_order_with_items",
    "get_product_by_id",
    "get_user_by_email",
    "get_user_by_id",
    "get_user_orders",
    "update_product",
    "update_profile",
]
