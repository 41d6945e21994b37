from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'finance'

router = DefaultRouter()
router.register(r'deposit-fees', views.DepositFeeViewSet, basename='deposit-fee')
router.register(r'deposits', views.DepositViewSet, basename='deposit')
router.register(r'credit', views.CreditAdjustmentViewSet, basename='credit')

urlpatterns = [
    path('', include(router.urls)),
]

# Available endpoints:
# GET    /api/finance/deposit-fees/              - Fee per deposit method
# PATCH  /api/finance/deposit-fees/{method}/     - Change a deposit fee
# GET    /api/finance/deposits/?retailer={id}    - Deposit history
# POST   /api/finance/deposits/                  - Deposit or removal
# POST   /api/finance/deposits/preview/          - Fee preview
# GET    /api/finance/credit/?retailer={id}      - Credit limit history
# POST   /api/finance/credit/                    - Credit limit adjustment
