from rest_framework import permissions


class IsMarketDM(permissions.BasePermission):
    """
    Permission: User must run the market.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Market instance
        return obj.dm_id == request.user.id
