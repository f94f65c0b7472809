"""Domain-specific exceptions for catalog services."""


class CatalogServiceError(Exception):
    """Base exception for catalog services."""
    pass


class LibraryItemNotFoundError(CatalogServiceError):
    """Raised when a library item does not exist or belongs to another DM."""
    pass


class LibraryLimitExceededError(CatalogServiceError):
    """Raised when a DM's library is full."""
    pass


class InvalidItemCostError(CatalogServiceError):
    """Raised when only half of a price (amount or denomination) is given."""
    pass
