"""
Markets app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    MarketsServiceError,
    MarketNotFoundError,
    MarketLimitExceededError,
    InsufficientPermissionsError,
)

from .market_management import (
    generate_access_code,
    create_market,
    get_market_by_id,
    get_market_by_access_code,
    list_markets_for_dm,
    update_market,
    activate_market,
    deactivate_market,
    delete_market,
    expire_markets,
    get_shareable_url,
)


__all__ = [
    # Exceptions
    'MarketsServiceError',
    'MarketNotFoundError',
    'MarketLimitExceededError',
    'InsufficientPermissionsError',

    # Market Management
    'generate_access_code',
    'create_market',
    'get_market_by_id',
    'get_market_by_access_code',
    'list_markets_for_dm',
    'update_market',
    'activate_market',
    'deactivate_market',
    'delete_market',
    'expire_markets',
    'get_shareable_url',
]
