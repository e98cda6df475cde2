"""
Test configuration and fixtures for dynamodb-tables.

Provides a moto-backed registry for end-to-end tests and a registry wired to
Mock boto3 objects for request-shape tests.
"""

import sys
from pathlib import Path
from unittest.mock import Mock

# Add parent directory to path so we can import dynamodb_tables
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from moto import mock_aws

from dynamodb_tables import DynamoDBConfig, create_registry


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake AWS credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def dynamodb_config():
    """DynamoDB configuration for testing."""
    return DynamoDBConfig(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        table_prefix="",
        wait_for_active_ms=5000,
        enable_debug_logging=False
    )


@pytest.fixture
def user_schema():
    """Hash-only schema with provisioned throughput."""
    return {
        'attributes': {'username': {'type': 'S'}},
        'throughput': 5,
    }


@pytest.fixture
def event_schema():
    """Hash and range schema billed on demand."""
    return {
        'attributes': {
            'stream': {'type': 'S'},
            'sequence': {'type': 'N', 'range': True},
        },
    }


@pytest.fixture
def registry(dynamodb_config):
    """Registry talking to moto's in-memory DynamoDB."""
    with mock_aws():
        yield create_registry(dynamodb_config)


@pytest.fixture
def mock_dynamodb():
    """Mock boto3 DynamoDB resource with a Table resource and low-level client."""
    resource = Mock()
    table = Mock()
    table.scan.return_value = {'Items': []}
    table.get_item.return_value = {}
    table.put_item.return_value = {}
    table.update_item.return_value = {}
    table.delete_item.return_value = {}
    resource.Table.return_value = table

    client = Mock()
    client.create_table.return_value = {'TableDescription': {'TableStatus': 'CREATING'}}
    client.describe_table.return_value = {'Table': {'TableStatus': 'ACTIVE'}}
    client.delete_table.return_value = {'TableDescription': {'TableStatus': 'DELETING'}}
    resource.meta.client = client
    return resource


@pytest.fixture
def mock_table(mock_dynamodb):
    return mock_dynamodb.Table.return_value


@pytest.fixture
def mock_client(mock_dynamodb):
    return mock_dynamodb.meta.client


@pytest.fixture
def mock_registry(dynamodb_config, mock_dynamodb):
    """Registry whose resource factory returns the Mock resource."""
    return create_registry(dynamodb_config, resource_factory=lambda config: mock_dynamodb)
