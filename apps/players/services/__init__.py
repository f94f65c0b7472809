"""Services for players business logic."""

from .exceptions import (
    PlayersServiceError,
    MarketNotOpenError,
    SessionNotFoundError,
    SessionEndedError,
)
from .session_management import (
    join_market,
    get_session,
    lock_session,
    update_wallet,
    record_activity,
    end_session,
    list_market_sessions,
    format_activity,
    delete_market_sessions,
    get_holding_quantity,
    add_holding,
    take_holding,
)

__all__ = [
    # Exceptions
    'PlayersServiceError',
    'MarketNotOpenError',
    'SessionNotFoundError',
    'SessionEndedError',
    # Services
    'join_market',
    'get_session',
    'lock_session',
    'update_wallet',
    'record_activity',
    'end_session',
    'list_market_sessions',
    'format_activity',
    'delete_market_sessions',
    'get_holding_quantity',
    'add_holding',
    'take_holding',
]
