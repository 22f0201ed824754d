"""
Suppliers app services layer.
"""

from .exceptions import (
    SuppliersServiceError,
    SupplierNotFoundError,
    DuplicateSupplierError,
    SupplierInUseError,
)

from .supplier_management import (
    list_suppliers,
    get_supplier_by_id,
    create_supplier,
    update_supplier,
    delete_supplier,
)


__all__ = [
    # Exceptions
    'SuppliersServiceError',
    'SupplierNotFoundError',
    'DuplicateSupplierError',
    'SupplierInUseError',

    # Supplier Management
    'list_suppliers',
    'get_supplier_by_id',
    'create_supplier',
    'update_supplier',
    'delete_supplier',
]
