import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from .models import Purchase
from .serializers import (
    PurchaseSerializer,
    PurchaseFilterSerializer,
    PurchaseCreateSerializer,
    AmountInputSerializer,
    AmountQuoteSerializer,
    PurchaseSummarySerializer,
    RegistrationResultSerializer,
)
from .services import (
    ledger,
    PurchaseRegistration,
    get_purchase_by_id,
    get_purchase_summary,
    list_purchases,
    list_recent_purchases,
)
from .exceptions import (
    PurchaseServiceError,
    PurchaseNotFoundError,
    ClientNotFoundAPIError,
)
from apps.clients import services as client_directory

logger = logging.getLogger(__name__)


def _load_client(client_id):
    """Resolve the selected client or raise a 404 API error."""
    if client_id is None:
        return None
    try:
        return client_directory.get_client_by_id(client_id=client_id)
    except client_directory.ClientNotFoundError:
        raise ClientNotFoundAPIError()


class PurchaseViewSet(viewsets.ViewSet):
    """
    ViewSet for loyalty purchases. Purchases are never updated or deleted.

    list: Recent purchases, or every purchase of ?client_name=
    create: Record a purchase directly in the ledger
    retrieve: Get a specific purchase
    """

    serializer_class = PurchaseSerializer

    @extend_schema(
        parameters=[OpenApiParameter('client_name', str, required=False)],
        responses={200: PurchaseSerializer(many=True)},
    )
    def list(self, request):
        """List purchases, newest first."""
        filter_serializer = PurchaseFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        client_name = filter_serializer.validated_data.get('client_name')

        if client_name:
            purchases = list_purchases(client_name=client_name)
        else:
            purchases = list_recent_purchases()

        return Response(PurchaseSerializer(purchases, many=True).data)

    @extend_schema(request=PurchaseCreateSerializer, responses={201: PurchaseSerializer})
    def create(self, request):
        """
        Record a purchase with the given client identity and amount.

        POST /api/purchases/
        Body: {"client_name": "...", "client_tax_id": "...", "amount": "1500.00"}
        """
        serializer = PurchaseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            purchase = ledger.create_purchase(**serializer.validated_data)
        except PurchaseServiceError as e:
            return Response(
                {'error': str(e), 'code': e.code},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            {
                'message': 'Purchase registered successfully',
                'data': PurchaseSerializer(purchase).data,
            },
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: PurchaseSerializer})
    def retrieve(self, request, pk=None):
        """Get a purchase by id."""
        purchase = get_purchase_by_id(purchase_id=pk)
        if purchase is None:
            raise PurchaseNotFoundError()
        return Response(PurchaseSerializer(purchase).data)

    @extend_schema(responses={200: PurchaseSummarySerializer})
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """
        Landing-page figures: today's total and average of the recent feed.

        GET /api/purchases/summary/
        """
        summary = get_purchase_summary()
        return Response(PurchaseSummarySerializer(summary).data)

    @extend_schema(request=AmountInputSerializer, responses={200: AmountQuoteSerializer})
    @action(detail=False, methods=['post'])
    def quote(self, request):
        """
        Preview the typed amount and, for eligible clients, the discount band.

        POST /api/purchases/quote/
        Body: {"client": "<uuid, optional>", "amount_raw": "150000"}
        """
        input_serializer = AmountInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        params = input_serializer.validated_data

        registration = PurchaseRegistration(ledger)
        client = _load_client(params.get('client'))
        if client is not None:
            registration.select_client(client)
        amount = registration.enter_amount(params.get('amount_raw', ''))

        return Response(AmountQuoteSerializer({
            'display': amount.display,
            'amount': amount.canonical,
            'discount': registration.quote(),
        }).data)

    @extend_schema(request=AmountInputSerializer, responses={201: RegistrationResultSerializer})
    @action(detail=False, methods=['post'])
    def register(self, request):
        """
        Register a purchase for the selected client from the raw amount field.

        POST /api/purchases/register/
        Body: {"client": "<uuid>", "amount_raw": "150000"}
        """
        input_serializer = AmountInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)
        params = input_serializer.validated_data

        registration = PurchaseRegistration(ledger)
        client = _load_client(params.get('client'))
        if client is not None:
            registration.select_client(client)
        registration.enter_amount(params.get('amount_raw', ''))

        notice = registration.submit()
        if not notice.ok:
            return Response(
                {'success': False, 'error': notice.message, 'code': notice.code},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(
            RegistrationResultSerializer(notice).data,
            status=status.HTTP_201_CREATED
        )
