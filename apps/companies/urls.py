from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'companies'

router = DefaultRouter()
router.register(r'', views.CompanyViewSet, basename='company')

urlpatterns = [
    # GET    /api/companies/               - List my companies
    # POST   /api/companies/               - Onboard company (creator becomes owner)
    # GET    /api/companies/{id}/          - Get company
    # PATCH  /api/companies/{id}/          - Rename company (owner)
    # GET    /api/companies/{id}/members/  - List members
    path('', include(router.urls)),
]
