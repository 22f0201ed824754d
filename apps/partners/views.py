from rest_framework import viewsets, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.cache import get_query_store, query_keys
from apps.common.pagination import ListPagination
from apps.companies.services import CompanyNotFoundError
from .serializers import (
    PartnerSerializer,
    PartnerListSerializer,
    PartnerDetailSerializer,
    PartnerCreateSerializer,
    PartnerUpdateSerializer,
    PartnerFilterSerializer,
)
from .services import (
    list_partners,
    get_partner_by_id,
    create_partner,
    update_partner,
    delete_partner,
    PartnerNotFoundError,
    DuplicatePartnerNameError,
)


class PartnerViewSet(viewsets.ViewSet):
    """
    Partners of a company.

    list: Partners of ?company=, with equipment counts (supports ?search=)
    create: Create a partner
    retrieve: Partner with linked equipment and percentages
    partial_update: Rename / change phone
    destroy: Delete a partner and its ownership rows
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
        responses={200: PartnerListSerializer(many=True)},
        tags=['partners'],
    )
    def list(self, request):
        filters = PartnerFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        company_id = filters.validated_data['company']
        search = filters.validated_data.get('search') or None

        try:
            queryset = list_partners(company_id=company_id, user=request.user, search=search)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.partners.all(company_id) + ({'search': search},),
            lambda: PartnerListSerializer(queryset, many=True).data,
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(data, request, view=self)
        return paginator.get_paginated_response(page)

    @extend_schema(request=PartnerCreateSerializer, responses={201: PartnerSerializer}, tags=['partners'])
    def create(self, request):
        serializer = PartnerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            partner = create_partner(
                company_id=serializer.validated_data['company'],
                user=request.user,
                name=serializer.validated_data['name'],
                phone=serializer.validated_data.get('phone', ''),
            )
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicatePartnerNameError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PartnerSerializer(partner).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: PartnerDetailSerializer}, tags=['partners'])
    def retrieve(self, request, pk=None):
        try:
            partner = get_partner_by_id(partner_id=pk, user=request.user)
        except PartnerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.partners.detail(partner.id),
            lambda: PartnerDetailSerializer(partner).data,
        )
        return Response(data)

    @extend_schema(request=PartnerUpdateSerializer, responses={200: PartnerSerializer}, tags=['partners'])
    def partial_update(self, request, pk=None):
        serializer = PartnerUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            partner = update_partner(
                partner_id=pk,
                user=request.user,
                **serializer.validated_data
            )
        except PartnerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicatePartnerNameError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PartnerSerializer(partner).data)

    @extend_schema(responses={204: None}, tags=['partners'])
    def destroy(self, request, pk=None):
        try:
            delete_partner(partner_id=pk, user=request.user)
        except PartnerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)
