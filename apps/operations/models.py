"""
Django discovers models through this module; the definitions live in the
infrastructure layer.
"""

from apps.operations.infrastructure.persistence.models import (  # noqa: F401
    OrganizationSettings,
    Payment,
    PurchaseOrder,
    SalesLineItem,
    SalesOrder,
)
