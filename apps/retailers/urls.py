from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'retailers'

router = DefaultRouter()
router.register(r'retailers', views.RetailerViewSet, basename='retailer')
router.register(r'agents', views.AgentViewSet, basename='agent')
router.register(r'terminals', views.TerminalViewSet, basename='terminal')

urlpatterns = [
    path('', include(router.urls)),
]

# Available endpoints:
# GET    /api/retailers/                           - List retailers
# POST   /api/retailers/                           - Create retailer (+ login account)
# GET    /api/retailers/me/                        - Signed-in retailer
# GET    /api/retailers/{id}/                      - Retailer detail
# PATCH  /api/retailers/{id}/                      - Update retailer
# PATCH  /api/retailers/{id}/balance/              - Overwrite balance
# POST   /api/retailers/{id}/reset-password/       - Reset retailer password
# GET    /api/retailers/{id}/terminals/            - Retailer terminals
# POST   /api/retailers/{id}/terminals/            - Add terminal
# GET    /api/agents/                              - Agent summaries
# POST   /api/agents/                              - Create agent
# GET    /api/agents/me/                           - Signed-in agent
# GET    /api/agents/unassigned/                   - Retailers without agent
# GET    /api/agents/{id}/                         - Agent summary
# PATCH  /api/agents/{id}/                         - Update agent
# GET    /api/agents/{id}/retailers/               - Agent retailers
# POST   /api/agents/{id}/assign/                  - Assign retailer
# POST   /api/agents/{id}/unassign/                - Unassign retailer
# GET    /api/terminals/me/                        - Signed-in terminal
# GET    /api/terminals/{id}/                      - Terminal detail
# PATCH  /api/terminals/{id}/                      - Update terminal
# POST   /api/terminals/{id}/reset-password/       - Reset terminal password
