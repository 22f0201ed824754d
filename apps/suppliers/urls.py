from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'suppliers'

router = DefaultRouter()
router.register(r'', views.SupplierViewSet, basename='supplier')

urlpatterns = [
    # GET    /api/suppliers/?company=&search=  - List suppliers
    # POST   /api/suppliers/                   - Create supplier
    # GET    /api/suppliers/{id}/              - Supplier with linked equipment
    # PATCH  /api/suppliers/{id}/              - Update supplier
    # DELETE /api/suppliers/{id}/              - Delete supplier (400 while in use)
    path('', include(router.urls)),
]
