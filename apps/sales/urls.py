from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'sales'

router = DefaultRouter()
router.register(r'sales', views.SaleViewSet, basename='sale')

urlpatterns = [
    path('reports/sales/', views.sales_report, name='sales-report'),
    path('reports/sales/export/', views.export_sales_report, name='sales-report-export'),
    path('reports/earnings/', views.earnings_summary, name='earnings-summary'),
    path('reports/inventory/', views.inventory_report, name='inventory-report'),
    path('reports/dashboard/', views.dashboard, name='dashboard'),
    path('', include(router.urls)),
]

# Available endpoints:
# GET    /api/sales/                        - Own sales (terminal or retailer)
# POST   /api/sales/                        - Sell vouchers (terminal)
# GET    /api/reports/sales/                - Grouped sales report
# GET    /api/reports/sales/export/         - Sales report CSV
# GET    /api/reports/earnings/             - Earnings per voucher type
# GET    /api/reports/inventory/            - Inventory per voucher type
# GET    /api/reports/dashboard/            - Dashboard figures
