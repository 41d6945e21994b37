from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'vouchers'

router = DefaultRouter()
router.register(r'types', views.VoucherTypeViewSet, basename='voucher-type')
router.register(r'inventory', views.VoucherInventoryViewSet, basename='voucher-inventory')

urlpatterns = [
    path('upload/', views.upload_voucher_file, name='upload'),
    path('upload/preview/', views.preview_voucher_file, name='upload-preview'),
    path('summaries/', views.voucher_type_summaries, name='summaries'),
    path('networks/', views.network_voucher_summaries, name='network-summaries'),
    path('networks/<str:provider>/<str:category>/stats/', views.network_category_stats, name='network-category-stats'),
    path(
        'networks/<str:provider>/<str:category>/<str:duration>/stats/',
        views.network_category_stats,
        name='network-category-duration-stats',
    ),
    path('', include(router.urls)),
]

# Available endpoints:
# GET    /api/vouchers/types/                               - List voucher types
# POST   /api/vouchers/types/                               - Create voucher type
# GET    /api/vouchers/types/{id}/                          - Voucher type detail
# PATCH  /api/vouchers/types/{id}/                          - Update voucher type
# PATCH  /api/vouchers/types/{id}/supplier-commission/      - Set supplier commission
# GET    /api/vouchers/inventory/                           - List inventory
# POST   /api/vouchers/inventory/                           - Bulk insert vouchers
# POST   /api/vouchers/inventory/{id}/disable/              - Disable voucher
# POST   /api/vouchers/upload/                              - Import supplier file
# POST   /api/vouchers/upload/preview/                      - Parse file without importing
# GET    /api/vouchers/summaries/                           - Stock per type
# GET    /api/vouchers/networks/                            - Stock per network
# GET    /api/vouchers/networks/{p}/{c}/stats/              - Category totals
# GET    /api/vouchers/networks/{p}/{c}/{d}/stats/          - Duration totals
