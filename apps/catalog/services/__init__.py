"""Services for catalog business logic."""

from .exceptions import (
    CatalogServiceError,
    LibraryItemNotFoundError,
    LibraryLimitExceededError,
    InvalidItemCostError,
)
from .library_management import (
    create_library_item,
    get_library_item,
    list_library_items,
    update_library_item,
    delete_library_item,
    get_item_usage_count,
    is_item_in_active_market,
)

__all__ = [
    # Exceptions
    'CatalogServiceError',
    'LibraryItemNotFoundError',
    'LibraryLimitExceededError',
    'InvalidItemCostError',
    # Services
    'create_library_item',
    'get_library_item',
    'list_library_items',
    'update_library_item',
    'delete_library_item',
    'get_item_usage_count',
    'is_item_in_active_market',
]
