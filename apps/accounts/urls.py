from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('login/', views.login, name='login'),

    # Current user
    path('me/', views.get_current_user, name='current-user'),
    path('me/permissions/', views.my_permissions, name='my-permissions'),
    path('permissions/', views.permission_catalog, name='permission-catalog'),

    # Password reset
    path('forgot-password/', views.request_password_reset, name='forgot-password'),
    path('reset-password/', views.confirm_password_reset, name='reset-password'),
]
