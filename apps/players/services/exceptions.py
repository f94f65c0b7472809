"""Domain-specific exceptions for players services."""


class PlayersServiceError(Exception):
    """Base exception for players services."""
    pass


class MarketNotOpenError(PlayersServiceError):
    """Raised when a market doesn't exist or is not open to players."""
    pass


class SessionNotFoundError(PlayersServiceError):
    """Raised when a player session does not exist."""
    pass


class SessionEndedError(PlayersServiceError):
    """Raised when acting on a session the player already left."""
    pass
