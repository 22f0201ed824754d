from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'equipment'

# Fixed prefixes are registered before the equipment detail route
router = DefaultRouter()
router.register(r'types', views.EquipmentTypeViewSet, basename='equipment-type')
router.register(r'ownership', views.EquipmentPartnerViewSet, basename='equipment-partner')
router.register(r'', views.EquipmentViewSet, basename='equipment')

urlpatterns = [
    # GET    /api/equipment/?company=...            - List equipment
    # POST   /api/equipment/                        - Create equipment
    # GET    /api/equipment/{id}/                   - Equipment detail
    # PATCH  /api/equipment/{id}/                   - Update equipment
    # POST   /api/equipment/{id}/archive/           - Archive
    # POST   /api/equipment/{id}/reactivate/        - Reactivate
    # GET    /api/equipment/{id}/partners/          - Ledger rows
    # POST   /api/equipment/{id}/partners/          - Add partner share
    # GET    /api/equipment/{id}/ownership/         - Ledger summary with company share

    # PATCH  /api/equipment/ownership/{row_id}/     - Change a share
    # DELETE /api/equipment/ownership/{row_id}/     - Remove a share

    # GET    /api/equipment/types/?company=...      - System + company types
    # POST   /api/equipment/types/                  - Create company type
    # DELETE /api/equipment/types/{id}/             - Delete unused company type
    path('', include(router.urls)),
]
