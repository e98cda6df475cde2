"""
dynamodb-tables

Table handles over Amazon DynamoDB that create missing tables on first use
and accept a small update DSL (``$push``, ``$pop``, ``$unset``).
"""

from .config import DynamoDBConfig
from .exceptions import (
    ConflictError,
    ConnectionError,
    DynamoDBTablesError,
    MissingSchemaError,
    ResourceNotFoundError,
    RetryableError,
    StoreError,
    StoreValidationError,
    ValidationError,
)
from .models import (
    AttributeType,
    KeyAttribute,
    TableSchema,
    Throughput,
)
from .core import (
    Table,
    TableRegistry,
    create_registry,
)
from .utils import build_attribute_updates

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "ConflictError",
    "ConnectionError",
    "DynamoDBTablesError",
    "MissingSchemaError",
    "ResourceNotFoundError",
    "RetryableError",
    "StoreError",
    "StoreValidationError",
    "ValidationError",

    # Schema models
    "AttributeType",
    "KeyAttribute",
    "TableSchema",
    "Throughput",

    # Tables
    "Table",
    "TableRegistry",
    "create_registry",

    # Helpers
    "build_attribute_updates",
]
