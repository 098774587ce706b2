from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'purchases'

router = DefaultRouter()
router.register(r'', views.PurchaseViewSet, basename='purchase')

urlpatterns = [
    # Purchase ViewSet routes
    # GET    /api/purchases/              - Recent purchases (?client_name= for one client)
    # POST   /api/purchases/              - Record purchase in the ledger
    # GET    /api/purchases/{id}/         - Get purchase details

    # Custom purchase actions
    # GET    /api/purchases/summary/      - Today's total and average
    # POST   /api/purchases/quote/        - Amount preview and discount band
    # POST   /api/purchases/register/     - Register purchase from the desk form

    # Include router URLs
    path('', include(router.urls)),
]
