# Base exception class
from .base import DynamoDBTablesError

from .domain_exceptions import (
    ConflictError,
    ConnectionError,
    MissingSchemaError,
    ResourceNotFoundError,
    RetryableError,
    StoreError,
    StoreValidationError,
    ValidationError,
)

__all__ = [
    # Base exception
    "DynamoDBTablesError",

    # Local errors
    "ConnectionError",
    "MissingSchemaError",
    "ValidationError",

    # Store errors
    "ConflictError",
    "ResourceNotFoundError",
    "RetryableError",
    "StoreError",
    "StoreValidationError",
]
