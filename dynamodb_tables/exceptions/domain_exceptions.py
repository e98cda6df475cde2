"""
Exceptions raised by table handles and the registry.

Two families extend the base DynamoDBTablesError:

1. Local errors, raised before any request reaches DynamoDB
   (missing or invalid schema, resource construction failures).
2. Store errors, one per class of DynamoDB ClientError. Every store error
   carries the DynamoDB error ``code`` so callers can match on the exception
   type instead of comparing code strings.
"""

from typing import Any, Dict, Optional

from .base import DynamoDBTablesError


# =============================================================================
# Local Errors
# =============================================================================

class MissingSchemaError(DynamoDBTablesError):
    """Raised when a table has to be created but no schema was ever supplied.

    Used for:
    - ``Table.init()`` called without a schema and without a prior ``define()``
    - Lazy provisioning of a missing table whose handle has no schema
    """

    def __init__(self, table_name: str):
        """Initialize missing schema error.

        Args:
            table_name: Name of the table that could not be created
        """
        self.table_name = table_name
        super().__init__(
            f"Missing schema definition for {table_name}",
            context={'table_name': table_name}
        )


class ValidationError(DynamoDBTablesError):
    """Raised when a schema handed to ``define``/``init`` fails validation."""

    def __init__(self, message: str, errors: Optional[Any] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or []
        super().__init__(message, original_error, {'validation_errors': self.errors})


class ConnectionError(DynamoDBTablesError):
    """Raised when the DynamoDB resource cannot be constructed.

    Used for:
    - Invalid session or credential configuration
    - Invalid endpoint configurations
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, original_error, context)


# =============================================================================
# Store Errors
# =============================================================================

class StoreError(DynamoDBTablesError):
    """Raised when DynamoDB rejects a request.

    Attributes:
        code: DynamoDB error code (e.g. ``ResourceNotFoundException``)
        operation: The API operation that failed (e.g. ``PutItem``)
        table_name: The table the request was addressed to
    """

    def __init__(
        self,
        code: str,
        message: str,
        operation: Optional[str] = None,
        table_name: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        """Initialize store error.

        Args:
            code: DynamoDB error code
            message: Human-readable error message
            operation: The operation that failed
            table_name: Name of the DynamoDB table
            original_error: The botocore ClientError that caused this error
        """
        self.code = code
        self.operation = operation
        self.table_name = table_name
        context = {'code': code}
        if operation:
            context['operation'] = operation
        if table_name:
            context['table_name'] = table_name
        super().__init__(message, original_error, context)


class ResourceNotFoundError(StoreError):
    """Raised when the addressed table does not exist (or is not yet active).

    This is the error that triggers lazy table provisioning on data
    operations and the "already gone" paths of ``Table.destroy``.
    """


class ConflictError(StoreError):
    """Raised when a request conflicts with the current state of the store.

    Used for:
    - ConditionalCheckFailedException
    - ResourceInUseException (e.g. creating a table that already exists)
    - Transaction conflicts
    """


class StoreValidationError(StoreError):
    """Raised when DynamoDB rejects the shape of a request.

    Used for:
    - ValidationException (malformed key schema, wrong key types, ...)
    - Limit and size errors
    """


class RetryableError(StoreError):
    """Raised for throttling and transient service failures.

    Used for:
    - ProvisionedThroughputExceededException
    - RequestLimitExceeded and ThrottlingException
    - InternalServerError and ServiceUnavailable
    """
