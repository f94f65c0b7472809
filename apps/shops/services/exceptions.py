"""
Domain-specific exceptions for shops app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ShopsServiceError(Exception):
    """Base exception for all shops service errors."""
    pass


class ShopNotFoundError(ShopsServiceError):
    """Raised when a shop does not exist."""
    pass


class ShopItemNotFoundError(ShopsServiceError):
    """Raised when a shop listing does not exist."""
    pass


class ShopLimitExceededError(ShopsServiceError):
    """Raised when a market already has the maximum number of shops."""
    pass


class ShopItemLimitExceededError(ShopsServiceError):
    """Raised when a shop already lists the maximum number of items."""
    pass


class InvalidShopOrderError(ShopsServiceError):
    """Raised when a reorder request doesn't name exactly the market's shops."""
    pass


class AlreadyIndependentError(ShopsServiceError):
    """Raised when making an already independent listing independent."""
    pass


class NotIndependentError(ShopsServiceError):
    """Raised when editing snapshot data of a listing still linked to the library."""
    pass


class InsufficientPermissionsError(ShopsServiceError):
    """Raised when a user acts on a shop in a market they do not run."""
    pass
