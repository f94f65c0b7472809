"""
Domain exceptions for purchases app.

Settlement itself never raises for business outcomes (no money, no stock,
till too poor): those come back as a failed ``PurchaseResult``. The
exceptions here cover requests that can't reach settlement at all.
"""
from rest_framework.exceptions import APIException


class SessionNotFoundError(APIException):
    """Player session not found."""
    status_code = 404
    default_detail = 'Player session not found.'
    default_code = 'session_not_found'


class ListingNotFoundError(APIException):
    """Shop item not found in the session's market."""
    status_code = 404
    default_detail = 'Item not found in this market.'
    default_code = 'listing_not_found'
