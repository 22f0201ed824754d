from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'workers'

# Fixed prefixes are registered before the worker detail route
router = DefaultRouter()
router.register(r'software', views.SoftwareViewSet, basename='software')
router.register(r'brands', views.EquipmentBrandViewSet, basename='equipment-brand')
router.register(r'equipment-skills', views.WorkerEquipmentSkillViewSet, basename='equipment-skill')
router.register(r'software-skills', views.WorkerSoftwareSkillViewSet, basename='software-skill')
router.register(r'', views.WorkerViewSet, basename='worker')

urlpatterns = [
    # GET    /api/workers/?company=...                  - List workers
    # POST   /api/workers/                              - Create worker (with skills)
    # GET    /api/workers/{id}/                         - Worker with skills
    # PATCH  /api/workers/{id}/                         - Update worker
    # POST   /api/workers/{id}/archive/                 - Archive
    # POST   /api/workers/{id}/reactivate/              - Reactivate
    # GET    /api/workers/{id}/equipment-skills/        - Equipment skills
    # POST   /api/workers/{id}/equipment-skills/        - Add equipment skill
    # GET    /api/workers/{id}/software-skills/         - Software skills
    # POST   /api/workers/{id}/software-skills/         - Add software skill

    # PATCH  /api/workers/equipment-skills/{skill_id}/  - Change rating
    # DELETE /api/workers/equipment-skills/{skill_id}/  - Remove equipment skill
    # DELETE /api/workers/software-skills/{skill_id}/   - Remove software skill

    # GET    /api/workers/software/?company=...         - Software catalogue
    # POST   /api/workers/software/                     - Add company software
    # GET    /api/workers/brands/?company=...           - Equipment brands
    # POST   /api/workers/brands/                       - Add company brand
    path('', include(router.urls)),
]
