from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'customers'

# Fixed prefixes are registered before the customer detail route
router = DefaultRouter()
router.register(r'contacts', views.CustomerContactViewSet, basename='contact')
router.register(r'sites', views.CustomerSiteViewSet, basename='site')
router.register(r'', views.CustomerViewSet, basename='customer')

urlpatterns = [
    # GET    /api/customers/?company=...           - List customers
    # POST   /api/customers/                       - Create customer
    # GET    /api/customers/{id}/                  - Customer with contacts and sites
    # PATCH  /api/customers/{id}/                  - Update customer
    # DELETE /api/customers/{id}/                  - Soft delete customer
    # GET    /api/customers/{id}/contacts/         - Contacts
    # POST   /api/customers/{id}/contacts/         - Add contact
    # GET    /api/customers/{id}/sites/            - Sites
    # POST   /api/customers/{id}/sites/            - Add site

    # PATCH  /api/customers/contacts/{contact_id}/ - Update contact
    # DELETE /api/customers/contacts/{contact_id}/ - Delete contact
    # PATCH  /api/customers/sites/{site_id}/       - Update site
    # DELETE /api/customers/sites/{site_id}/       - Soft delete site
    path('', include(router.urls)),
]
