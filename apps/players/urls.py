from django.urls import path
from . import views

app_name = 'players'

urlpatterns = [
    # Market entry
    path('market/<str:access_code>/', views.market_detail, name='market-detail'),
    path('market/<str:access_code>/join/', views.join, name='join'),
    path('market/<str:access_code>/shops/<uuid:shop_id>/', views.shop_detail, name='shop-detail'),

    # Session
    path('sessions/<uuid:session_id>/', views.session_detail, name='session-detail'),
    path('sessions/<uuid:session_id>/end/', views.end, name='session-end'),
]
