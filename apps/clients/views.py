from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from .models import Client
from .serializers import (
    ClientSerializer,
    ClientListSerializer,
    ClientWriteSerializer,
    ClientLookupSerializer,
    ClientPurchaseHistorySerializer,
)
from .services import (
    create_client,
    update_client,
    search_clients,
    get_client_by_id,
    get_client_by_tax_id,
    get_client_by_name,
    ClientNotFoundError,
    ClientValidationError,
    DuplicateTaxIdError,
    InvalidBenefitsError,
)
from apps.purchases.services import list_purchases, get_client_purchase_total


class ClientPagination(PageNumberPagination):
    """Custom pagination for clients."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


def _rejection(error, code, http_status=status.HTTP_400_BAD_REQUEST):
    body = {'error': str(error), 'code': code}
    if getattr(error, 'errors', None):
        body['fields'] = error.errors
    return Response(body, status=http_status)


class ClientViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for loyalty clients. Clients are never deleted.

    list: Get all clients (filterable with ?search=)
    create: Register a new client
    retrieve: Get a specific client
    update: Edit a client
    partial_update: Partially edit a client
    """

    queryset = Client.objects.all()
    serializer_class = ClientSerializer
    pagination_class = ClientPagination

    def get_queryset(self):
        """Filter by name substring (case-insensitive) or tax id substring."""
        return search_clients(self.request.query_params.get('search'))

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'list':
            return ClientListSerializer
        elif self.action in ['create', 'update', 'partial_update']:
            return ClientWriteSerializer
        return ClientSerializer

    @extend_schema(responses={201: ClientSerializer})
    def create(self, request, *args, **kwargs):
        """Register a new client."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            client = create_client(**serializer.validated_data)
        except DuplicateTaxIdError as e:
            return _rejection(e, 'duplicate_tax_id')
        except InvalidBenefitsError as e:
            return _rejection(e, 'invalid_benefits')
        except ClientValidationError as e:
            return _rejection(e, 'invalid_client')

        return Response(
            {
                'message': 'Client registered successfully',
                'data': ClientSerializer(client).data,
            },
            status=status.HTTP_201_CREATED
        )

    @extend_schema(responses={200: ClientSerializer})
    def update(self, request, *args, **kwargs):
        """Edit a client (PUT replaces all fields, PATCH only the given ones)."""
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            client = update_client(
                client_id=kwargs.get('pk'),
                data=serializer.validated_data
            )
        except ClientNotFoundError as e:
            return _rejection(e, 'client_not_found', status.HTTP_404_NOT_FOUND)
        except DuplicateTaxIdError as e:
            return _rejection(e, 'duplicate_tax_id')
        except InvalidBenefitsError as e:
            return _rejection(e, 'invalid_benefits')
        except ClientValidationError as e:
            return _rejection(e, 'invalid_client')

        return Response({
            'message': 'Client updated successfully',
            'data': ClientSerializer(client).data,
        })

    def retrieve(self, request, *args, **kwargs):
        """Get a client by id."""
        try:
            client = get_client_by_id(client_id=kwargs.get('pk'))
        except ClientNotFoundError as e:
            return _rejection(e, 'client_not_found', status.HTTP_404_NOT_FOUND)
        return Response(ClientSerializer(client).data)

    @extend_schema(
        parameters=[OpenApiParameter('tax_id', str, required=True)],
        responses={200: ClientSerializer},
    )
    @action(detail=False, methods=['get'], url_path='by-tax-id')
    def by_tax_id(self, request):
        """Find a client by tax id, ignoring punctuation."""
        params = ClientLookupSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        tax_id = params.validated_data.get('tax_id')
        if not tax_id:
            return Response(
                {'error': 'Please provide a tax id', 'code': 'input_empty'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            client = get_client_by_tax_id(tax_id=tax_id)
        except ClientNotFoundError as e:
            return _rejection(e, 'client_not_found', status.HTTP_404_NOT_FOUND)
        return Response(ClientSerializer(client).data)

    @extend_schema(
        parameters=[OpenApiParameter('name', str, required=True)],
        responses={200: ClientSerializer},
    )
    @action(detail=False, methods=['get'], url_path='by-name')
    def by_name(self, request):
        """Find a client by name, case-insensitive."""
        params = ClientLookupSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        name = params.validated_data.get('name')
        if not name:
            return Response(
                {'error': 'Please provide a client name', 'code': 'input_empty'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            client = get_client_by_name(name=name)
        except ClientNotFoundError as e:
            return _rejection(e, 'client_not_found', status.HTTP_404_NOT_FOUND)
        return Response(ClientSerializer(client).data)

    @extend_schema(responses={200: ClientPurchaseHistorySerializer})
    @action(detail=True, methods=['get'])
    def purchases(self, request, pk=None):
        """
        Purchase history of a client, newest first, with the total spent.

        GET /api/clients/{id}/purchases/
        """
        try:
            client = get_client_by_id(client_id=pk)
        except ClientNotFoundError as e:
            return _rejection(e, 'client_not_found', status.HTTP_404_NOT_FOUND)

        return Response(ClientPurchaseHistorySerializer({
            'client': client,
            'purchases': list_purchases(client_name=client.name),
            'total': get_client_purchase_total(client_name=client.name),
        }).data)
