"""
Core components for table provisioning and item operations.

- TableRegistry: one Table handle per name, sharing a boto3 resource
- Table: item operations with lazy table creation
- Factory functions for registries and resources
"""

from .registry import TableRegistry, create_dynamodb_resource, create_registry
from .table import Table, map_dynamodb_error

__all__ = [
    "Table",
    "TableRegistry",
    "create_dynamodb_resource",
    "create_registry",
    "map_dynamodb_error",
]
