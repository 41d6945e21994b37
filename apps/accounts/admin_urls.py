from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'admins'

router = DefaultRouter()
router.register(r'admins', views.AdminViewSet, basename='admin')

urlpatterns = [
    path('', include(router.urls)),
]

# Available endpoints:
# GET    /api/admins/                               - List admins
# POST   /api/admins/                               - Create admin
# GET    /api/admins/{id}/                          - Admin detail
# PATCH  /api/admins/{id}/                          - Update admin
# POST   /api/admins/{id}/activate/                 - Activate admin
# POST   /api/admins/{id}/deactivate/               - Deactivate admin
# GET    /api/admins/{id}/permissions/              - Stored permissions
# POST   /api/admins/{id}/permissions/add/          - Grant permission (super admin)
# POST   /api/admins/{id}/permissions/remove/       - Revoke permission (super admin)
# POST   /api/admins/{id}/permissions/toggle/       - Grant/revoke (super admin)
# PUT    /api/admins/{id}/permissions/set/          - Replace permissions (super admin)
