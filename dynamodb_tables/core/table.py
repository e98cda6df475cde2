"""
Table Handle

A ``Table`` is bound to one table name and exposes a small set of
operations on it:

- ``define`` / ``init``: attach a schema and provision the table
- ``scan`` / ``get`` / ``put`` / ``update`` / ``delete``: item operations
- ``destroy``: drop the table

Item operations are wrapped so that a missing table is created on first use:
when DynamoDB answers ``ResourceNotFoundException`` the handle calls
``init()`` with its stored schema and retries the operation once. Any other
failure, and any failure of the retry, reaches the caller unchanged.

Items and keys are plain dicts handed to the boto3 Table resource, which
takes care of marshalling Python values. Table-level calls (create,
describe, delete) go through the resource's low-level client.
"""

import functools
import logging
import time
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Union

from botocore.exceptions import ClientError

from ..config import DynamoDBConfig
from ..exceptions import (
    ConflictError,
    MissingSchemaError,
    ResourceNotFoundError,
    RetryableError,
    StoreError,
    StoreValidationError,
)
from ..models import TableSchema
from ..utils import build_attribute_updates, coerce_schema, compact_params

logger = logging.getLogger(__name__)

ACTIVE = 'ACTIVE'


def map_dynamodb_error(error: ClientError, operation: str, table_name: str) -> StoreError:
    """Map a DynamoDB ClientError to a StoreError subclass.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "GetItem", "CreateTable")
        table_name: The DynamoDB table name

    Returns:
        ResourceNotFoundError, ConflictError, StoreValidationError,
        RetryableError, or a plain StoreError for unrecognised codes
    """
    error_code = error.response.get('Error', {}).get('Code', 'Unknown')
    error_message = error.response.get('Error', {}).get('Message', str(error))
    full_message = f"{operation} on {table_name}: {error_message}"

    if error_code == 'ResourceNotFoundException':
        error_class = ResourceNotFoundError

    elif error_code in [
        'ConditionalCheckFailedException', 'ResourceInUseException', 'TableAlreadyExistsException',
        'TransactionConflictException'
    ]:
        error_class = ConflictError

    elif error_code in [
        'ValidationException', 'LimitExceededException', 'ItemCollectionSizeLimitExceededException'
    ]:
        error_class = StoreValidationError

    elif error_code in [
        'ProvisionedThroughputExceededException', 'RequestLimitExceeded', 'ThrottlingException',
        'InternalServerError', 'ServiceUnavailable'
    ]:
        error_class = RetryableError

    else:
        error_class = StoreError

    return error_class(error_code, full_message, operation, table_name, original_error=error)


def provision_on_missing_table(method: Callable) -> Callable:
    """Create the table and retry once when ``method`` hits a missing table."""

    @functools.wraps(method)
    def wrapper(self: 'Table', *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except ResourceNotFoundError:
            logger.warning(f"Table {self.table_name} not found during {method.__name__}, creating it")
            self.init()
            return method(self, *args, **kwargs)

    return wrapper


class Table:
    """
    Handle for one DynamoDB table.

    Handles are normally obtained from ``TableRegistry.get_table`` which
    shares one boto3 resource between them. Constructing a handle performs
    no network call.
    """

    def __init__(
        self,
        name: str,
        config: DynamoDBConfig,
        resource_getter: Callable[[], Any],
        wait_for_active_ms: Optional[int] = None
    ):
        """Initialize table handle.

        Args:
            name: Logical table name
            config: DynamoDB configuration
            resource_getter: Returns the shared boto3 DynamoDB resource
            wait_for_active_ms: Activation timeout for init(), negative waits forever
        """
        self.name = name
        self.config = config
        self.table_name = config.get_table_name(name)
        self.wait_for_active_ms = (
            config.wait_for_active_ms if wait_for_active_ms is None else wait_for_active_ms
        )
        self.schema: Optional[TableSchema] = None
        self._resource_getter = resource_getter
        self._table = None

    def __repr__(self) -> str:
        return f"Table(name={self.name!r}, table_name={self.table_name!r})"

    @property
    def dynamodb(self):
        return self._resource_getter()

    @property
    def client(self):
        """Low-level client for table management calls."""
        return self.dynamodb.meta.client

    @property
    def table(self):
        """boto3 Table resource used for item operations."""
        if self._table is None:
            self._table = self.dynamodb.Table(self.table_name)
        return self._table

    def _request(self, operation: str, call: Callable, **params) -> Dict[str, Any]:
        try:
            return call(**params)
        except ClientError as e:
            raise map_dynamodb_error(e, operation, self.table_name) from e

    def _elapsed_ms(self, start: float) -> float:
        return (time.monotonic() - start) * 1000

    # -------------------------------------------------------------------------
    # Schema and provisioning
    # -------------------------------------------------------------------------

    def define(self, schema: Union[TableSchema, Mapping]) -> None:
        """Attach a schema used when the table has to be created.

        Does not contact DynamoDB. Calling it again replaces the schema.
        """
        self.schema = coerce_schema(schema)

    def init(self, schema: Optional[Union[TableSchema, Mapping]] = None) -> bool:
        """
        Create the table and wait for it to become ACTIVE.

        Args:
            schema: Schema to create the table with; stored on the handle.
                Defaults to the schema passed to ``define``.

        Returns:
            True once the table is ACTIVE, False if ``wait_for_active_ms``
            elapsed first

        Raises:
            MissingSchemaError: If no schema was given or defined
            StoreError: If DynamoDB rejects CreateTable or DescribeTable
                (ConflictError when the table already exists)
        """
        if schema is not None:
            self.define(schema)
        if self.schema is None:
            raise MissingSchemaError(self.table_name)

        self._request(
            'CreateTable',
            self.client.create_table,
            **self.schema.to_create_table_params(self.table_name)
        )
        logger.info(f"Created table {self.table_name} ({self.schema.billing_mode})")

        start = time.monotonic()
        while self.wait_for_active_ms < 0 or self._elapsed_ms(start) < self.wait_for_active_ms:
            response = self._request('DescribeTable', self.client.describe_table, TableName=self.table_name)
            status = response.get('Table', {}).get('TableStatus')
            if status == ACTIVE:
                logger.info(f"Table {self.table_name} is active")
                return True
            logger.debug(f"Table {self.table_name} status is {status}, waiting")
            time.sleep(self.config.poll_interval_seconds)

        logger.warning(f"Table {self.table_name} not active after {self.wait_for_active_ms}ms")
        return False

    def destroy(self, wait_ms: int = 0) -> bool:
        """
        Delete the table.

        Args:
            wait_ms: How long to wait for the deletion to complete; 0 returns
                right after DeleteTable is accepted, negative waits forever

        Returns:
            True if the table did not exist, False otherwise (deletion
            confirmed or ``wait_ms`` elapsed)

        Raises:
            StoreError: For any DynamoDB failure other than a missing table
        """
        try:
            self._request('DeleteTable', self.client.delete_table, TableName=self.table_name)
        except ResourceNotFoundError:
            logger.info(f"Table {self.table_name} already absent")
            return True

        logger.info(f"Deleting table {self.table_name}")

        start = time.monotonic()
        while wait_ms < 0 or self._elapsed_ms(start) < wait_ms:
            try:
                self._request('DescribeTable', self.client.describe_table, TableName=self.table_name)
            except ResourceNotFoundError:
                logger.info(f"Table {self.table_name} deleted")
                return False
            time.sleep(self.config.poll_interval_seconds)

        return False

    # -------------------------------------------------------------------------
    # Item operations
    # -------------------------------------------------------------------------

    @provision_on_missing_table
    def scan(self) -> List[Dict[str, Any]]:
        """
        Scan the whole table.

        Only the first page is returned; LastEvaluatedKey is not followed.
        """
        response = self._request('Scan', self.table.scan)
        return response.get('Items', [])

    @provision_on_missing_table
    def get(
        self,
        key: Dict[str, Any],
        attributes: Optional[List[str]] = None,
        consistent: Optional[bool] = None,
        attribute_names: Optional[Dict[str, str]] = None,
        projection: Optional[str] = None,
        capacity: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Get one item by key.

        Args:
            key: Primary key of the item
            attributes: Legacy AttributesToGet projection
            consistent: Use strongly consistent reads
            attribute_names: ExpressionAttributeNames for ``projection``
            projection: ProjectionExpression
            capacity: ReturnConsumedCapacity level (INDEXES, TOTAL or NONE)

        Returns:
            The item, or None if no item has this key
        """
        response = self._request(
            'GetItem',
            self.table.get_item,
            **compact_params(
                Key=key,
                AttributesToGet=attributes,
                ConsistentRead=consistent,
                ExpressionAttributeNames=attribute_names,
                ProjectionExpression=projection,
                ReturnConsumedCapacity=capacity,
            )
        )
        return response.get('Item')

    @provision_on_missing_table
    def put(self, item: Dict[str, Any], returns: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Write an item, replacing any item with the same key.

        Args:
            item: Full item including its key attributes
            returns: ReturnValues (NONE or ALL_OLD)

        Returns:
            Attributes echoed by DynamoDB, if any
        """
        response = self._request(
            'PutItem',
            self.table.put_item,
            **compact_params(
                Item=item,
                ReturnValues=returns,
                ReturnConsumedCapacity='NONE',
                ReturnItemCollectionMetrics='NONE',
            )
        )
        logger.info(f"Put item in {self.table_name}: {item}")
        return response.get('Attributes')

    @provision_on_missing_table
    def update(
        self,
        key: Dict[str, Any],
        directive: Mapping,
        returns: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Update an item with an update directive.

        Example:
            users.update(
                {'username': 'bob'},
                {'age': 43, '$push': {'logins': 1}, '$unset': {'nickname': True}}
            )

        Args:
            key: Primary key of the item
            directive: Attribute values to set plus ``$push``/``$pop``/``$unset``
            returns: ReturnValues (NONE, ALL_OLD, UPDATED_OLD, ALL_NEW, UPDATED_NEW)

        Returns:
            Attributes echoed by DynamoDB, if any
        """
        response = self._request(
            'UpdateItem',
            self.table.update_item,
            **compact_params(
                Key=key,
                AttributeUpdates=build_attribute_updates(directive),
                ReturnValues=returns,
                ReturnConsumedCapacity='NONE',
                ReturnItemCollectionMetrics='NONE',
            )
        )
        logger.info(f"Updated item in {self.table_name}: {key}")
        return response.get('Attributes')

    @provision_on_missing_table
    def delete(self, key: Dict[str, Any], returns: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Delete an item by key.

        Args:
            key: Primary key of the item
            returns: ReturnValues (NONE or ALL_OLD)

        Returns:
            Attributes echoed by DynamoDB, if any
        """
        response = self._request(
            'DeleteItem',
            self.table.delete_item,
            **compact_params(
                Key=key,
                ReturnValues=returns,
                ReturnConsumedCapacity='NONE',
                ReturnItemCollectionMetrics='NONE',
            )
        )
        logger.info(f"Deleted item from {self.table_name}: {key}")
        return response.get('Attributes')
