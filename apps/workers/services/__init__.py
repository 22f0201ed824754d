"""
Workers app services layer.

This module provides business logic for:
- Worker CRUD and archiving
- Equipment and software skills
- The software and equipment brand catalogues
"""

from .exceptions import (
    WorkersServiceError,
    WorkerNotFoundError,
    InvalidSalaryError,
    SkillNotFoundError,
    DuplicateSkillError,
    CatalogEntryNotFoundError,
    DuplicateCatalogEntryError,
)

from .worker_management import (
    list_workers,
    get_worker_by_id,
    create_worker,
    update_worker,
    archive_worker,
    reactivate_worker,
)

from .worker_skills import (
    list_equipment_skills,
    add_equipment_skill,
    update_equipment_skill,
    remove_equipment_skill,
    list_software_skills,
    add_software_skill,
    remove_software_skill,
)

from .catalog import (
    list_software,
    create_software,
    list_equipment_brands,
    create_equipment_brand,
)


__all__ = [
    # Exceptions
    'WorkersServiceError',
    'WorkerNotFoundError',
    'InvalidSalaryError',
    'SkillNotFoundError',
    'DuplicateSkillError',
    'CatalogEntryNotFoundError',
    'DuplicateCatalogEntryError',

    # Worker Management
    'list_workers',
    'get_worker_by_id',
    'create_worker',
    'update_worker',
    'archive_worker',
    'reactivate_worker',

    # Skills
    'list_equipment_skills',
    'add_equipment_skill',
    'update_equipment_skill',
    'remove_equipment_skill',
    'list_software_skills',
    'add_software_skill',
    'remove_software_skill',

    # Catalogues
    'list_software',
    'create_software',
    'list_equipment_brands',
    'create_equipment_brand',
]
