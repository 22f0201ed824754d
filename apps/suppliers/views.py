from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.cache import get_query_store, query_keys
from apps.common.pagination import ListPagination
from apps.companies.services import CompanyNotFoundError
from .serializers import (
    SupplierSerializer,
    SupplierListSerializer,
    SupplierDetailSerializer,
    SupplierCreateSerializer,
    SupplierUpdateSerializer,
    SupplierFilterSerializer,
)
from .services import (
    list_suppliers,
    get_supplier_by_id,
    create_supplier,
    update_supplier,
    delete_supplier,
    SupplierNotFoundError,
    DuplicateSupplierError,
    SupplierInUseError,
)


class SupplierViewSet(viewsets.ViewSet):
    """
    Suppliers of a company.

    list: Suppliers of ?company=, with equipment counts (supports ?search=)
    create: Create a supplier
    retrieve: Supplier with linked equipment
    partial_update: Rename / change phone
    destroy: Delete a supplier no equipment references
    """

    permission_classes = [IsAuthenticated]
    pagination_class = ListPagination

    @property
    def store(self):
        return get_query_store()

    @extend_schema(
        parameters=[
            OpenApiParameter('company', str, required=True),
            OpenApiParameter('search', str),
        ],
        responses={200: SupplierListSerializer(many=True)},
        tags=['suppliers'],
    )
    def list(self, request):
        filters = SupplierFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        company_id = filters.validated_data['company']
        search = filters.validated_data.get('search') or None

        try:
            queryset = list_suppliers(company_id=company_id, user=request.user, search=search)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.suppliers.all(company_id) + ({'search': search},),
            lambda: SupplierListSerializer(queryset, many=True).data,
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(data, request, view=self)
        return paginator.get_paginated_response(page)

    @extend_schema(request=SupplierCreateSerializer, responses={201: SupplierSerializer}, tags=['suppliers'])
    def create(self, request):
        serializer = SupplierCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            supplier = create_supplier(
                company_id=serializer.validated_data['company'],
                user=request.user,
                name=serializer.validated_data['name'],
                phone=serializer.validated_data.get('phone', ''),
            )
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateSupplierError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SupplierSerializer(supplier).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: SupplierDetailSerializer}, tags=['suppliers'])
    def retrieve(self, request, pk=None):
        try:
            supplier = get_supplier_by_id(supplier_id=pk, user=request.user)
        except SupplierNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.suppliers.detail(supplier.id),
            lambda: SupplierDetailSerializer(supplier).data,
        )
        return Response(data)

    @extend_schema(request=SupplierUpdateSerializer, responses={200: SupplierSerializer}, tags=['suppliers'])
    def partial_update(self, request, pk=None):
        serializer = SupplierUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            supplier = update_supplier(
                supplier_id=pk,
                user=request.user,
                **serializer.validated_data
            )
        except SupplierNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateSupplierError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SupplierSerializer(supplier).data)

    @extend_schema(responses={204: None}, tags=['suppliers'])
    def destroy(self, request, pk=None):
        try:
            delete_supplier(supplier_id=pk, user=request.user)
        except SupplierNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except SupplierInUseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)
