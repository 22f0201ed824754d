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
    WorkerSerializer,
    WorkerDetailSerializer,
    WorkerCreateSerializer,
    WorkerUpdateSerializer,
    WorkerFilterSerializer,
    WorkerEquipmentSkillSerializer,
    WorkerEquipmentSkillCreateSerializer,
    WorkerEquipmentSkillUpdateSerializer,
    WorkerSoftwareSkillSerializer,
    WorkerSoftwareSkillCreateSerializer,
    SoftwareSerializer,
    EquipmentBrandSerializer,
    CatalogEntryCreateSerializer,
    CatalogFilterSerializer,
)
from .services import (
    list_workers,
    get_worker_by_id,
    create_worker,
    update_worker,
    archive_worker,
    reactivate_worker,
    list_equipment_skills,
    add_equipment_skill,
    update_equipment_skill,
    remove_equipment_skill,
    list_software_skills,
    add_software_skill,
    remove_software_skill,
    list_software,
    create_software,
    list_equipment_brands,
    create_equipment_brand,
    WorkerNotFoundError,
    InvalidSalaryError,
    SkillNotFoundError,
    DuplicateSkillError,
    CatalogEntryNotFoundError,
    DuplicateCatalogEntryError,
)


class WorkerViewSet(viewsets.ViewSet):
    """
    Workers of a company.

    list: Workers of ?company= (filters: status, category, search)
    create: Create a worker with optional initial skills
    retrieve: Worker with equipment and software skills
    partial_update: Update worker fields
    archive / reactivate: Toggle status
    equipment_skills: GET skills / POST add a skill
    software_skills: GET skills / POST add a skill
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
            OpenApiParameter('category', str),
            OpenApiParameter('search', str),
        ],
        responses={200: WorkerSerializer(many=True)},
        tags=['workers'],
    )
    def list(self, request):
        filters = WorkerFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data
        company_id = params['company']
        key_filters = {
            'status': params.get('status'),
            'category': params.get('category'),
            'search': params.get('search') or None,
        }

        try:
            queryset = list_workers(company_id=company_id, user=request.user, **key_filters)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.workers.all(company_id) + (key_filters,),
            lambda: WorkerSerializer(queryset, many=True).data,
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(data, request, view=self)
        return paginator.get_paginated_response(page)

    @extend_schema(request=WorkerCreateSerializer, responses={201: WorkerDetailSerializer}, tags=['workers'])
    def create(self, request):
        serializer = WorkerCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        company_id = data.pop('company')

        try:
            worker = create_worker(company_id=company_id, user=request.user, **data)
            worker = get_worker_by_id(worker_id=worker.id, user=request.user)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (InvalidSalaryError, CatalogEntryNotFoundError, DuplicateSkillError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(WorkerDetailSerializer(worker).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: WorkerDetailSerializer}, tags=['workers'])
    def retrieve(self, request, pk=None):
        try:
            worker = get_worker_by_id(worker_id=pk, user=request.user)
        except WorkerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = self.store.get_or_fetch(
            query_keys.workers.detail(worker.id),
            lambda: WorkerDetailSerializer(worker).data,
        )
        return Response(data)

    @extend_schema(request=WorkerUpdateSerializer, responses={200: WorkerSerializer}, tags=['workers'])
    def partial_update(self, request, pk=None):
        serializer = WorkerUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            worker = update_worker(worker_id=pk, user=request.user, **serializer.validated_data)
        except WorkerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidSalaryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(WorkerSerializer(worker).data)

    @extend_schema(request=None, responses={200: WorkerSerializer}, tags=['workers'])
    @action(detail=True, methods=['post'])
    def archive(self, request, pk=None):
        """Archive a worker (status -> inactive)."""
        try:
            worker = archive_worker(worker_id=pk, user=request.user)
        except WorkerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(WorkerSerializer(worker).data)

    @extend_schema(request=None, responses={200: WorkerSerializer}, tags=['workers'])
    @action(detail=True, methods=['post'])
    def reactivate(self, request, pk=None):
        """Reactivate an archived worker."""
        try:
            worker = reactivate_worker(worker_id=pk, user=request.user)
        except WorkerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(WorkerSerializer(worker).data)

    @extend_schema(
        methods=['GET'],
        responses={200: WorkerEquipmentSkillSerializer(many=True)},
        tags=['workers'],
    )
    @extend_schema(
        methods=['POST'],
        request=WorkerEquipmentSkillCreateSerializer,
        responses={201: WorkerEquipmentSkillSerializer},
        tags=['workers'],
    )
    @action(detail=True, methods=['get', 'post'], url_path='equipment-skills')
    def equipment_skills(self, request, pk=None):
        """GET: equipment skills of the worker. POST: add one."""
        if request.method == 'GET':
            try:
                skills = list_equipment_skills(worker_id=pk, user=request.user)
            except WorkerNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

            data = self.store.get_or_fetch(
                query_keys.workers.equipment_skills(UUID(str(pk))),
                lambda: WorkerEquipmentSkillSerializer(skills, many=True).data,
            )
            return Response(data)

        serializer = WorkerEquipmentSkillCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            skill = add_equipment_skill(worker_id=pk, user=request.user, **serializer.validated_data)
        except WorkerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (CatalogEntryNotFoundError, DuplicateSkillError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(WorkerEquipmentSkillSerializer(skill).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        methods=['GET'],
        responses={200: WorkerSoftwareSkillSerializer(many=True)},
        tags=['workers'],
    )
    @extend_schema(
        methods=['POST'],
        request=WorkerSoftwareSkillCreateSerializer,
        responses={201: WorkerSoftwareSkillSerializer},
        tags=['workers'],
    )
    @action(detail=True, methods=['get', 'post'], url_path='software-skills')
    def software_skills(self, request, pk=None):
        """GET: software skills of the worker. POST: add one."""
        if request.method == 'GET':
            try:
                skills = list_software_skills(worker_id=pk, user=request.user)
            except WorkerNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

            data = self.store.get_or_fetch(
                query_keys.workers.software_skills(UUID(str(pk))),
                lambda: WorkerSoftwareSkillSerializer(skills, many=True).data,
            )
            return Response(data)

        serializer = WorkerSoftwareSkillCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            skill = add_software_skill(
                worker_id=pk,
                user=request.user,
                software_id=serializer.validated_data['software_id'],
            )
        except WorkerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (CatalogEntryNotFoundError, DuplicateSkillError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(WorkerSoftwareSkillSerializer(skill).data, status=status.HTTP_201_CREATED)


class WorkerEquipmentSkillViewSet(viewsets.ViewSet):
    """
    Single equipment skills.

    partial_update: Change the proficiency rating
    destroy: Remove the skill
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=WorkerEquipmentSkillUpdateSerializer,
        responses={200: WorkerEquipmentSkillSerializer},
        tags=['workers'],
    )
    def partial_update(self, request, pk=None):
        serializer = WorkerEquipmentSkillUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            skill = update_equipment_skill(
                skill_id=pk,
                user=request.user,
                proficiency_rating=serializer.validated_data['proficiency_rating'],
            )
        except SkillNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(WorkerEquipmentSkillSerializer(skill).data)

    @extend_schema(responses={204: None}, tags=['workers'])
    def destroy(self, request, pk=None):
        try:
            remove_equipment_skill(skill_id=pk, user=request.user)
        except SkillNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class WorkerSoftwareSkillViewSet(viewsets.ViewSet):
    """destroy: Remove a software skill."""

    permission_classes = [IsAuthenticated]

    @extend_schema(responses={204: None}, tags=['workers'])
    def destroy(self, request, pk=None):
        try:
            remove_software_skill(skill_id=pk, user=request.user)
        except SkillNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(status=status.HTTP_204_NO_CONTENT)


class SoftwareViewSet(viewsets.ViewSet):
    """
    Software catalogue.

    list: Seeded software plus the entries of ?company=
    create: Add a company entry
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[OpenApiParameter('company', str, required=True)],
        responses={200: SoftwareSerializer(many=True)},
        tags=['workers'],
    )
    def list(self, request):
        filters = CatalogFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        company_id = filters.validated_data['company']

        try:
            software = list_software(company_id=company_id, user=request.user)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = get_query_store().get_or_fetch(
            query_keys.workers.software(company_id),
            lambda: SoftwareSerializer(software, many=True).data,
        )
        return Response(data)

    @extend_schema(request=CatalogEntryCreateSerializer, responses={201: SoftwareSerializer}, tags=['workers'])
    def create(self, request):
        serializer = CatalogEntryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            software = create_software(
                company_id=serializer.validated_data['company'],
                user=request.user,
                name=serializer.validated_data['name'],
            )
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateCatalogEntryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SoftwareSerializer(software).data, status=status.HTTP_201_CREATED)


class EquipmentBrandViewSet(viewsets.ViewSet):
    """
    Equipment brand catalogue.

    list: Shared brands plus the brands of ?company=
    create: Add a company brand
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        parameters=[OpenApiParameter('company', str, required=True)],
        responses={200: EquipmentBrandSerializer(many=True)},
        tags=['workers'],
    )
    def list(self, request):
        filters = CatalogFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        company_id = filters.validated_data['company']

        try:
            brands = list_equipment_brands(company_id=company_id, user=request.user)
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        data = get_query_store().get_or_fetch(
            query_keys.workers.equipment_brands(company_id),
            lambda: EquipmentBrandSerializer(brands, many=True).data,
        )
        return Response(data)

    @extend_schema(request=CatalogEntryCreateSerializer, responses={201: EquipmentBrandSerializer}, tags=['workers'])
    def create(self, request):
        serializer = CatalogEntryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            brand = create_equipment_brand(
                company_id=serializer.validated_data['company'],
                user=request.user,
                name=serializer.validated_data['name'],
            )
        except CompanyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DuplicateCatalogEntryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(EquipmentBrandSerializer(brand).data, status=status.HTTP_201_CREATED)
