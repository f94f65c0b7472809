"""
Domain-specific exceptions for markets app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class MarketsServiceError(Exception):
    """Base exception for all markets service errors."""
    pass


class MarketNotFoundError(MarketsServiceError):
    """Raised when a market does not exist or is not open to players."""
    pass


class MarketLimitExceededError(MarketsServiceError):
    """Raised when a DM already owns the maximum number of markets."""
    pass


class InsufficientPermissionsError(MarketsServiceError):
    """Raised when a user acts on a market they do not run."""
    pass
