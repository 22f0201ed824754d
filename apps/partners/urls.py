from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'partners'

router = DefaultRouter()
router.register(r'', views.PartnerViewSet, basename='partner')

urlpatterns = [
    # GET    /api/partners/?company=&search=  - List partners
    # POST   /api/partners/                   - Create partner
    # GET    /api/partners/{id}/              - Partner with shares
    # PATCH  /api/partners/{id}/              - Update partner
    # DELETE /api/partners/{id}/              - Delete partner and its ownership rows
    path('', include(router.urls)),
]
