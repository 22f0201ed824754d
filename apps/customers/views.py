from uuid import UUID

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.common.cache import get_query_store, query_keys
from apps.common.pagination import ListPagination
from apps.companies.services import CompanyNotFoundError
from .serializers import (
    CustomerSerializer,
    CustomerDetailSerializer,
    CustomerCreateSerializer,
    CustomerUpdateSerializer,
    CustomerFilterSerializer,
    CustomerContactSerializer,
    CustomerContactCreateSerializer,
    CustomerContactUpdateSerializer,
    CustomerSiteSerializer,
    CustomerSiteCreateSerializer,
    CustomerSiteUpdateSerializer,
)
from .services import (
    list_customers,
    get_customer_by_id,
    create_customer,
    update_customer,
    delete_customer,
    list_contacts,
    create_contact,
    update_contact,
    delete_contact,
    list_sites,
    create_site,
    update_site,
    delete_site,
    CustomerNotFoundError,
    ContactNotFoundError,
    SiteNotFoundError,
)


class CustomerViewSet(viewsets.ViewSet):
    """
    Customers of a company.

    list: Live customers of ?company= (filters: status, customer_type, search)
    create: Create a customer
    retrieve: Customer with contacts and sites
    partial_update: Update customer fields
    destroy: Soft delete
    contacts: GET contacts / POST add a contact
    sites: GET sites / POST add a site
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
            OpenApiParameter('customer_type', str),
            OpenApiParameter('search', str),
        ],
        responses={200: CustomerSerializer(many=True)},
        tags=['customers'],
    )
    def list(self, request):
        filters = CustomerFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data
        company_id = params['company']
        key_filters = {
            'status': params.get('status'),
            'customer_type': params.get('customer_type'),
            'search': params.get('search') or None,
        }

        try:
            queryset = list_customers(company_id=company_id, user=request.user, **key_filters)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.customers.all(company_id) + (key_filters,),
            lambda: CustomerSerializer(queryset, many=True).data,
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(data, request, view=self)
        return paginator.get_paginated_response(page)

    @extend_schema(request=CustomerCreateSerializer, responses={201: CustomerSerializer}, tags=['customers'])
    def create(self, request):
        serializer = CustomerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        company_id = data.pop('company')

        try:
            customer = create_customer(company_id=company_id, user=request.user, **data)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: CustomerDetailSerializer}, tags=['customers'])
    def retrieve(self, request, pk=None):
        try:
            customer = get_customer_by_id(customer_id=pk, user=request.user)
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.customers.detail(customer.id),
            lambda: CustomerDetailSerializer(customer).data,
        )
        return Response(data)

    @extend_schema(request=CustomerUpdateSerializer, responses={200: CustomerSerializer}, tags=['customers'])
    def partial_update(self, request, pk=None):
        serializer = CustomerUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            customer = update_customer(customer_id=pk, user=request.user, **serializer.validated_data)
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(CustomerSerializer(customer).data)

    @extend_schema(responses={204: None}, tags=['customers'])
    def destroy(self, request, pk=None):
        try:
            delete_customer(customer_id=pk, user=request.user)
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(methods=['GET'], responses={200: CustomerContactSerializer(many=True)}, tags=['customers'])
    @extend_schema(
        methods=['POST'],
        request=CustomerContactCreateSerializer,
        responses={201: CustomerContactSerializer},
        tags=['customers'],
    )
    @action(detail=True, methods=['get', 'post'])
    def contacts(self, request, pk=None):
        """GET: contacts, primary first. POST: add a contact."""
        if request.method == 'GET':
            try:
                contacts = list_contacts(customer_id=pk, user=request.user)
            except CustomerNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

            data = self.store.get_or_fetch(
                query_keys.customers.contacts(UUID(str(pk))),
                lambda: CustomerContactSerializer(contacts, many=True).data,
            )
            return Response(data)

        serializer = CustomerContactCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            contact = create_contact(customer_id=pk, user=request.user, **serializer.validated_data)
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(CustomerContactSerializer(contact).data, status=status.HTTP_201_CREATED)

    @extend_schema(methods=['GET'], responses={200: CustomerSiteSerializer(many=True)}, tags=['customers'])
    @extend_schema(
        methods=['POST'],
        request=CustomerSiteCreateSerializer,
        responses={201: CustomerSiteSerializer},
        tags=['customers'],
    )
    @action(detail=True, methods=['get', 'post'])
    def sites(self, request, pk=None):
        """GET: live sites. POST: add a site."""
        if request.method == 'GET':
            try:
                sites = list_sites(customer_id=pk, user=request.user)
            except CustomerNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

            data = self.store.get_or_fetch(
                query_keys.customers.sites(UUID(str(pk))),
                lambda: CustomerSiteSerializer(sites, many=True).data,
            )
            return Response(data)

        serializer = CustomerSiteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            site = create_site(customer_id=pk, user=request.user, **serializer.validated_data)
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(CustomerSiteSerializer(site).data, status=status.HTTP_201_CREATED)


class CustomerContactViewSet(viewsets.ViewSet):
    """
    Single contacts.

    partial_update: Update a contact
    destroy: Delete a contact
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=CustomerContactUpdateSerializer,
        responses={200: CustomerContactSerializer},
        tags=['customers'],
    )
    def partial_update(self, request, pk=None):
        serializer = CustomerContactUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            contact = update_contact(contact_id=pk, user=request.user, **serializer.validated_data)
        except ContactNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(CustomerContactSerializer(contact).data)

    @extend_schema(responses={204: None}, tags=['customers'])
    def destroy(self, request, pk=None):
        try:
            delete_contact(contact_id=pk, user=request.user)
        except ContactNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class CustomerSiteViewSet(viewsets.ViewSet):
    """
    Single sites.

    partial_update: Update a site
    destroy: Soft delete a site
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=CustomerSiteUpdateSerializer,
        responses={200: CustomerSiteSerializer},
        tags=['customers'],
    )
    def partial_update(self, request, pk=None):
        serializer = CustomerSiteUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            site = update_site(site_id=pk, user=request.user, **serializer.validated_data)
        except SiteNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(CustomerSiteSerializer(site).data)

    @extend_schema(responses={204: None}, tags=['customers'])
    def destroy(self, request, pk=None):
        try:
            delete_site(site_id=pk, user=request.user)
        except SiteNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)
