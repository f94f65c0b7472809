"""
Shops app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
The row-locked stock and till primitives used by purchase settlement live
in ``apps.shops.services.stock``.
"""

from .exceptions import (
    ShopsServiceError,
    ShopNotFoundError,
    ShopItemNotFoundError,
    ShopLimitExceededError,
    ShopItemLimitExceededError,
    InvalidShopOrderError,
    AlreadyIndependentError,
    NotIndependentError,
    InsufficientPermissionsError,
)

from .shop_management import (
    create_shop,
    get_shop,
    list_shops_for_market,
    update_shop,
    reorder_shops,
    delete_shop,
)

from .shop_item_management import (
    UNCHANGED,
    add_item_to_shop,
    get_shop_item,
    list_items_for_shop,
    list_items_for_market,
    update_shop_item,
    make_item_independent,
    remove_item_from_shop,
)


__all__ = [
    # Exceptions
    'ShopsServiceError',
    'ShopNotFoundError',
    'ShopItemNotFoundError',
    'ShopLimitExceededError',
    'ShopItemLimitExceededError',
    'InvalidShopOrderError',
    'AlreadyIndependentError',
    'NotIndependentError',
    'InsufficientPermissionsError',

    # Shop Management
    'create_shop',
    'get_shop',
    'list_shops_for_market',
    'update_shop',
    'reorder_shops',
    'delete_shop',

    # Listing Management
    'UNCHANGED',
    'add_item_to_shop',
    'get_shop_item',
    'list_items_for_shop',
    'list_items_for_market',
    'update_shop_item',
    'make_item_independent',
    'remove_item_from_shop',
]
