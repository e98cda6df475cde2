"""
Table Registry

Hands out one ``Table`` per table name and shares a single boto3 DynamoDB
resource between them:

```python
tables = create_registry()
users = tables.get_table('User')     # or tables['User']
users.define({'attributes': {'username': {'type': 'S'}}, 'throughput': 5})
users.put({'username': 'bob', 'age': 42})   # creates the table if missing
```
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import boto3
from botocore.config import Config

from ..config import DynamoDBConfig
from ..exceptions import ConnectionError
from .table import Table

logger = logging.getLogger(__name__)

ResourceFactory = Callable[[DynamoDBConfig], Any]


def create_dynamodb_resource(config: DynamoDBConfig):
    """Build a boto3 DynamoDB service resource from configuration.

    Raises:
        ConnectionError: If the session or resource cannot be created
    """
    try:
        session = boto3.Session(
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            region_name=config.region_name
        )

        # Configure connection parameters
        dynamodb_config = {
            'region_name': config.region_name
        }

        if config.endpoint_url:
            dynamodb_config['endpoint_url'] = config.endpoint_url

        # Add retry and timeout configuration
        dynamodb_config['config'] = Config(
            retries={'max_attempts': config.retries},
            max_pool_connections=config.max_pool_connections,
            read_timeout=config.timeout_seconds,
            connect_timeout=config.timeout_seconds
        )

        return session.resource('dynamodb', **dynamodb_config)
    except Exception as e:
        logger.error(f"Failed to create DynamoDB resource: {e}")
        raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e


class TableRegistry:
    """
    Cache of table handles keyed by table name.

    Handles are built on first request and live as long as the registry.
    The boto3 resource is created lazily, the first time a handle talks to
    DynamoDB.
    """

    def __init__(
        self,
        config: Optional[DynamoDBConfig] = None,
        resource_factory: Optional[ResourceFactory] = None,
        wait_for_active_ms: Optional[int] = None
    ):
        """Initialize registry.

        Args:
            config: DynamoDB configuration, defaults to ``DynamoDBConfig.from_env()``
            resource_factory: Builds the boto3 DynamoDB resource from the config
            wait_for_active_ms: Overrides ``config.wait_for_active_ms`` for every handle
        """
        self.config = config or DynamoDBConfig.from_env()
        self.resource_factory = resource_factory or create_dynamodb_resource
        self.wait_for_active_ms = (
            self.config.wait_for_active_ms if wait_for_active_ms is None else wait_for_active_ms
        )
        self._dynamodb = None
        self._tables: Dict[str, Table] = {}

        if self.config.enable_debug_logging:
            logging.getLogger('dynamodb_tables').setLevel(logging.DEBUG)

    @property
    def dynamodb(self):
        """Lazy initialization of the shared DynamoDB resource."""
        if self._dynamodb is None:
            self._dynamodb = self.resource_factory(self.config)
        return self._dynamodb

    @property
    def tables(self) -> List[str]:
        """Names of the handles built so far."""
        return list(self._tables)

    def get_table(self, name: str) -> Table:
        """Return the handle for ``name``, creating it on first request."""
        table = self._tables.get(name)
        if table is None:
            table = Table(
                name,
                self.config,
                lambda: self.dynamodb,
                wait_for_active_ms=self.wait_for_active_ms
            )
            self._tables[name] = table
        return table

    def __getitem__(self, name: str) -> Table:
        return self.get_table(name)

    def __contains__(self, name: str) -> bool:
        return name in self._tables


def create_registry(
    config: Optional[DynamoDBConfig] = None,
    resource_factory: Optional[ResourceFactory] = None,
    wait_for_active_ms: Optional[int] = None
) -> TableRegistry:
    """
    Factory function to create a TableRegistry.

    Args:
        config: DynamoDB configuration, defaults to environment-based config
        resource_factory: Builds the boto3 DynamoDB resource from the config
        wait_for_active_ms: Activation timeout for init(), negative waits forever

    Returns:
        Configured TableRegistry instance
    """
    return TableRegistry(config, resource_factory, wait_for_active_ms)
