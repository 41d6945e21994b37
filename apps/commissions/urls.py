from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'commissions'

router = DefaultRouter()
router.register(r'groups', views.CommissionGroupViewSet, basename='commission-group')
router.register(r'overrides', views.CommissionOverrideViewSet, basename='commission-override')

urlpatterns = [
    path('amounts/<uuid:voucher_type_id>/', views.voucher_amounts, name='voucher-amounts'),
    path('preview/', views.preview_commission, name='preview'),
    path('', include(router.urls)),
]

# Available endpoints:
# GET    /api/commissions/groups/                  - Groups with retailer/agent counts
# GET    /api/commissions/groups/active/           - Active groups with rates
# POST   /api/commissions/groups/                  - Create group (+ rates)
# GET    /api/commissions/groups/{id}/             - Group detail
# PATCH  /api/commissions/groups/{id}/             - Update group
# DELETE /api/commissions/groups/{id}/             - Archive group
# PUT    /api/commissions/groups/{id}/rates/       - Upsert voucher type rate
# GET    /api/commissions/overrides/               - Overrides of a voucher type
# POST   /api/commissions/overrides/               - Upsert override
# DELETE /api/commissions/overrides/remove/        - Delete override
# GET    /api/commissions/amounts/{type_id}/       - Stocked face values
# GET    /api/commissions/preview/                 - Resolve a commission split
