from rest_framework import permissions


class IsMarketDM(permissions.BasePermission):
    """
    Permission: User must run the market the shop or listing belongs to.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Shop or ShopItem instance
        return obj.market.dm_id == request.user.id
