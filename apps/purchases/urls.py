from django.urls import path
from . import views

app_name = 'purchases'

urlpatterns = [
    # POST /api/purchases/buy/                 - Player buys an item
    # POST /api/purchases/sell/                - Player sells an item
    # GET  /api/purchases/stock/{shop_item_id}/ - Stock of a listing
    path('buy/', views.buy, name='buy'),
    path('sell/', views.sell, name='sell'),
    path('stock/<uuid:shop_item_id>/', views.stock, name='stock'),
]
