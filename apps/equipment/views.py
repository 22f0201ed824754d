from uuid import UUID

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.cache import get_query_store, query_keys
from apps.common.pagination import ListPagination
from apps.companies.services import CompanyNotFoundError
from apps.partners.services import PartnerNotFoundError
from .serializers import (
    EquipmentSerializer,
    EquipmentDetailSerializer,
    EquipmentCreateSerializer,
    EquipmentUpdateSerializer,
    EquipmentFilterSerializer,
    EquipmentTypeSerializer,
    EquipmentTypeCreateSerializer,
    EquipmentTypeFilterSerializer,
    EquipmentPartnerSerializer,
    EquipmentPartnerCreateSerializer,
    EquipmentPartnerUpdateSerializer,
    OwnershipSummarySerializer,
)
from .services import (
    list_equipment,
    get_equipment_by_id,
    create_equipment,
    update_equipment,
    archive_equipment,
    reactivate_equipment,
    list_equipment_types,
    create_equipment_type,
    delete_equipment_type,
    list_equipment_partners,
    get_ownership_summary,
    add_equipment_partner,
    update_equipment_partner,
    remove_equipment_partner,
    LedgerFailure,
    EquipmentNotFoundError,
    DuplicateSerialNumberError,
    MissingRentalFieldsError,
    InvalidRentalFieldsError,
    EquipmentTypeNotFoundError,
    DuplicateEquipmentTypeError,
    EquipmentTypeInUseError,
    SystemEquipmentTypeError,
    EquipmentNotOwnedError,
    EquipmentPartnerNotFoundError,
    OwnershipRuleError,
)


def ownership_error_response(error):
    """Render a rejected ledger write as 400 (404 for a vanished row)."""
    total = error.current_total
    data = {
        'error': str(error),
        'code': error.code,
        'current_total': f"{total:.2f}" if total is not None else None,
    }
    if error.check.reason == LedgerFailure.ROW_NOT_FOUND:
        return Response(data, status=status.HTTP_404_NOT_FOUND)
    return Response(data, status=status.HTTP_400_BAD_REQUEST)


def rental_error_response(error):
    data = {'error': str(error)}
    if isinstance(error, MissingRentalFieldsError):
        data['fields'] = error.fields
    return Response(data, status=status.HTTP_400_BAD_REQUEST)


class EquipmentViewSet(viewsets.ViewSet):
    """
    Equipment of a company.

    list: Equipment of ?company= (filters: status, ownership_type,
        equipment_type, search)
    create: Create equipment
    retrieve: Equipment with type and supplier
    partial_update: Update equipment (ownership-type transitions included)
    archive / reactivate: Toggle status
    partners: GET ledger rows / POST add a partner share
    ownership: Ledger summary with company share
    """

    permission_classes = [IsAuthenticated]
    pagination_class = ListPagination

    @property
    def store(self):
        return get_query_store()

    @extend_schema(
        parameters=[
            OpenApiParameter('company', str, required=True),
            OpenApiParameter('status', str),
            OpenApiParameter('ownership_type', str),
            OpenApiParameter('equipment_type', str),
            OpenApiParameter('search', str),
        ],
        responses={200: EquipmentSerializer(many=True)},
        tags=['equipment'],
    )
    def list(self, request):
        filters = EquipmentFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data
        company_id = params['company']
        key_filters = {
            'status': params.get('status'),
            'ownership_type': params.get('ownership_type'),
            'equipment_type': params.get('equipment_type'),
            'search': params.get('search') or None,
        }

        try:
            queryset = list_equipment(
                company_id=company_id,
                user=request.user,
                status=key_filters['status'],
                ownership_type=key_filters['ownership_type'],
                equipment_type_id=key_filters['equipment_type'],
                search=key_filters['search'],
            )
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.equipment.all(company_id) + (key_filters,),
            lambda: EquipmentSerializer(queryset, many=True).data,
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(data, request, view=self)
        return paginator.get_paginated_response(page)

    @extend_schema(request=EquipmentCreateSerializer, responses={201: EquipmentDetailSerializer}, tags=['equipment'])
    def create(self, request):
        serializer = EquipmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        company_id = data.pop('company')

        try:
            equipment = create_equipment(company_id=company_id, user=request.user, **data)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (MissingRentalFieldsError, InvalidRentalFieldsError) as e:
            return rental_error_response(e)
        except (EquipmentTypeNotFoundError, DuplicateSerialNumberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(EquipmentDetailSerializer(equipment).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: EquipmentDetailSerializer}, tags=['equipment'])
    def retrieve(self, request, pk=None):
        try:
            equipment = get_equipment_by_id(equipment_id=pk, user=request.user)
        except EquipmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.equipment.detail(equipment.id),
            lambda: EquipmentDetailSerializer(equipment).data,
        )
        return Response(data)

    @extend_schema(request=EquipmentUpdateSerializer, responses={200: EquipmentDetailSerializer}, tags=['equipment'])
    def partial_update(self, request, pk=None):
        serializer = EquipmentUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            update_equipment(equipment_id=pk, user=request.user, **serializer.validated_data)
            equipment = get_equipment_by_id(equipment_id=pk, user=request.user)
        except EquipmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (MissingRentalFieldsError, InvalidRentalFieldsError) as e:
            return rental_error_response(e)
        except (EquipmentTypeNotFoundError, DuplicateSerialNumberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(EquipmentDetailSerializer(equipment).data)

    @extend_schema(request=None, responses={200: EquipmentDetailSerializer}, tags=['equipment'])
    @action(detail=True, methods=['post'])
    def archive(self, request, pk=None):
        """Archive equipment (status -> inactive)."""
        try:
            archive_equipment(equipment_id=pk, user=request.user)
            equipment = get_equipment_by_id(equipment_id=pk, user=request.user)
        except EquipmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(EquipmentDetailSerializer(equipment).data)

    @extend_schema(request=None, responses={200: EquipmentDetailSerializer}, tags=['equipment'])
    @action(detail=True, methods=['post'])
    def reactivate(self, request, pk=None):
        """Reactivate archived equipment."""
        try:
            reactivate_equipment(equipment_id=pk, user=request.user)
            equipment = get_equipment_by_id(equipment_id=pk, user=request.user)
        except EquipmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(EquipmentDetailSerializer(equipment).data)

    @extend_schema(
        methods=['GET'],
        responses={200: EquipmentPartnerSerializer(many=True)},
        tags=['equipment'],
    )
    @extend_schema(
        methods=['POST'],
        request=EquipmentPartnerCreateSerializer,
        responses={201: EquipmentPartnerSerializer},
        tags=['equipment'],
    )
    @action(detail=True, methods=['get', 'post'])
    def partners(self, request, pk=None):
        """GET: ledger rows of the equipment. POST: add a partner share."""
        if request.method == 'GET':
            try:
                rows = list_equipment_partners(equipment_id=pk, user=request.user)
            except EquipmentNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

            data = self.store.get_or_fetch(
                query_keys.equipment.partners(UUID(str(pk))),
                lambda: EquipmentPartnerSerializer(rows, many=True).data,
            )
            return Response(data)

        serializer = EquipmentPartnerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            row = add_equipment_partner(
                equipment_id=pk,
                partner_id=serializer.validated_data['partner_id'],
                percentage=serializer.validated_data['percentage'],
                user=request.user,
            )
        except EquipmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (EquipmentNotOwnedError, PartnerNotFoundError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except OwnershipRuleError as e:
            return ownership_error_response(e)

        return Response(EquipmentPartnerSerializer(row).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: OwnershipSummarySerializer}, tags=['equipment'])
    @action(detail=True, methods=['get'])
    def ownership(self, request, pk=None):
        """Ledger rows with partner total and company share."""
        try:
            summary = get_ownership_summary(equipment_id=pk, user=request.user)
        except EquipmentNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.equipment.partners(summary.equipment.id) + ('summary',),
            lambda: OwnershipSummarySerializer(summary).data,
        )
        return Response(data)


class EquipmentPartnerViewSet(viewsets.ViewSet):
    """
    Single ledger rows.

    partial_update: Change the percentage
    destroy: Remove the partner's share
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=EquipmentPartnerUpdateSerializer,
        responses={200: EquipmentPartnerSerializer},
        tags=['equipment'],
    )
    def partial_update(self, request, pk=None):
        serializer = EquipmentPartnerUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            row = update_equipment_partner(
                equipment_partner_id=pk,
                percentage=serializer.validated_data['percentage'],
                user=request.user,
            )
        except EquipmentPartnerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except OwnershipRuleError as e:
            return ownership_error_response(e)

        return Response(EquipmentPartnerSerializer(row).data)

    @extend_schema(responses={204: None}, tags=['equipment'])
    def destroy(self, request, pk=None):
        try:
            remove_equipment_partner(equipment_partner_id=pk, user=request.user)
        except EquipmentPartnerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class EquipmentTypeViewSet(viewsets.ViewSet):
    """
    Equipment types visible to a company.

    list: System defaults plus company types for ?company=
    create: Create a company type
    destroy: Delete an unused company type
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[OpenApiParameter('company', str, required=True)],
        responses={200: EquipmentTypeSerializer(many=True)},
        tags=['equipment'],
    )
    def list(self, request):
        filters = EquipmentTypeFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        company_id = filters.validated_data['company']

        try:
            types = list_equipment_types(company_id=company_id, user=request.user)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = get_query_store().get_or_fetch(
            query_keys.equipment.types(company_id),
            lambda: EquipmentTypeSerializer(types, many=True).data,
        )
        return Response(data)

    @extend_schema(request=EquipmentTypeCreateSerializer, responses={201: EquipmentTypeSerializer}, tags=['equipment'])
    def create(self, request):
        serializer = EquipmentTypeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            equipment_type = create_equipment_type(
                company_id=serializer.validated_data['company'],
                user=request.user,
                name=serializer.validated_data['name'],
            )
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateEquipmentTypeError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(EquipmentTypeSerializer(equipment_type).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={204: None}, tags=['equipment'])
    def destroy(self, request, pk=None):
        try:
            delete_equipment_type(equipment_type_id=pk, user=request.user)
        except EquipmentTypeNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except SystemEquipmentTypeError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except EquipmentTypeInUseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)
