from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'clients'

router = DefaultRouter()
router.register(r'', views.ClientViewSet, basename='client')

urlpatterns = [
    # Client ViewSet routes
    # GET    /api/clients/              - List clients (?search=)
    # POST   /api/clients/              - Register client
    # GET    /api/clients/{id}/         - Get client details
    # PUT    /api/clients/{id}/         - Update client
    # PATCH  /api/clients/{id}/         - Partial update

    # Custom actions
    # GET    /api/clients/by-tax-id/?tax_id=  - Find client by tax id digits
    # GET    /api/clients/by-name/?name=      - Find client by name
    # GET    /api/clients/{id}/purchases/     - Purchase history of a client

    # Include router URLs
    path('', include(router.urls)),
]
