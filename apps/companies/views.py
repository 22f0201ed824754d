from uuid import UUID

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.common.cache import get_query_store, query_keys
from .serializers import (
    CompanySerializer,
    CompanyMembershipSerializer,
    CompanyMemberSerializer,
    CompanyInputSerializer,
)
from .services import (
    onboard_company,
    get_my_companies,
    get_company_by_id,
    update_company,
    get_company_members,
    CompanyNotFoundError,
    InsufficientPermissionsError,
)


class CompanyViewSet(viewsets.ViewSet):
    """
    Companies of the current user.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Memberships of the current user (with company)
    create: Onboard a new company with the current user as owner
    retrieve: Get a company (members only)
    partial_update: Rename a company (owner only)
    members: List company members
    """

    permission_classes = [IsAuthenticated]

    @property
    def store(self):
        return get_query_store()

    @extend_schema(responses={200: CompanyMembershipSerializer(many=True)}, tags=['companies'])
    def list(self, request):
        data = self.store.get_or_fetch(
            query_keys.companies.mine(request.user.id),
            lambda: CompanyMembershipSerializer(get_my_companies(user=request.user), many=True).data,
        )
        return Response(data)

    @extend_schema(request=CompanyInputSerializer, responses={201: CompanySerializer}, tags=['companies'])
    def create(self, request):
        serializer = CompanyInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        company = onboard_company(name=serializer.validated_data['name'], user=request.user)
        return Response(CompanySerializer(company).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: CompanySerializer}, tags=['companies'])
    def retrieve(self, request, pk=None):
        try:
            company = get_company_by_id(company_id=pk, user=request.user)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.companies.detail(company.id),
            lambda: CompanySerializer(company).data,
        )
        return Response(data)

    @extend_schema(request=CompanyInputSerializer, responses={200: CompanySerializer}, tags=['companies'])
    def partial_update(self, request, pk=None):
        serializer = CompanyInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            company = update_company(
                company_id=pk,
                user=request.user,
                name=serializer.validated_data['name'],
            )
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(CompanySerializer(company).data)

    @extend_schema(responses={200: CompanyMemberSerializer(many=True)}, tags=['companies'])
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """List members of the company."""
        try:
            memberships = get_company_members(company_id=pk, user=request.user)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.companies.members(UUID(str(pk))),
            lambda: CompanyMemberSerializer(memberships, many=True).data,
        )
        return Response(data)
