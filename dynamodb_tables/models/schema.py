"""
Table Schema Models

A table schema describes what ``Table.init`` needs to create a DynamoDB table:

```python
TableSchema(
    attributes={
        'username': {'type': 'S'},               # partition (HASH) key
        'created_at': {'type': 'N', 'range': True},  # sort (RANGE) key
    },
    throughput=5,             # or {'read': 5, 'write': 1}; omit for on-demand
    kms='alias/my-key',       # optional SSE with a customer managed key
)
```

Only key attributes belong in ``attributes``. Key cardinality (one HASH,
at most one RANGE) is left to DynamoDB to enforce.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AttributeType(str, Enum):
    """DynamoDB scalar types usable as key attributes."""
    STRING = "S"
    NUMBER = "N"
    BINARY = "B"


class KeyType(str, Enum):
    HASH = "HASH"
    RANGE = "RANGE"


class BillingMode(str, Enum):
    PROVISIONED = "PROVISIONED"
    PAY_PER_REQUEST = "PAY_PER_REQUEST"


class KeyAttribute(BaseModel):
    """A key attribute declaration."""

    type: AttributeType = Field(..., description="DynamoDB attribute type (S, N or B)")
    range: bool = Field(default=False, description="True for the sort key, False for the partition key")

    model_config = ConfigDict(use_enum_values=True)


class Throughput(BaseModel):
    """Provisioned read/write capacity."""

    read: int = Field(..., description="Read capacity units")
    write: int = Field(..., description="Write capacity units")


class TableSchema(BaseModel):
    """Everything needed to create a table."""

    attributes: Dict[str, KeyAttribute] = Field(..., description="Key attributes by name")
    throughput: Optional[Union[int, Throughput]] = Field(
        default=None,
        description="Provisioned capacity; a single number sets both read and write"
    )
    kms: Optional[str] = Field(default=None, description="KMS key id for server-side encryption")

    model_config = ConfigDict(use_enum_values=True)

    @property
    def billing_mode(self) -> str:
        return BillingMode.PROVISIONED.value if self.throughput else BillingMode.PAY_PER_REQUEST.value

    def key_schema(self) -> List[Dict[str, str]]:
        """KeySchema entries, one per declared attribute, in declaration order."""
        return [
            {
                'AttributeName': name,
                'KeyType': KeyType.RANGE.value if attribute.range else KeyType.HASH.value,
            }
            for name, attribute in self.attributes.items()
        ]

    def attribute_definitions(self) -> List[Dict[str, str]]:
        return [
            {'AttributeName': name, 'AttributeType': attribute.type}
            for name, attribute in self.attributes.items()
        ]

    def provisioned_throughput(self) -> Optional[Dict[str, int]]:
        if not self.throughput:
            return None
        if isinstance(self.throughput, Throughput):
            read, write = self.throughput.read, self.throughput.write
        else:
            read = write = self.throughput
        return {'ReadCapacityUnits': read, 'WriteCapacityUnits': write}

    def sse_specification(self) -> Optional[Dict[str, Any]]:
        if not self.kms:
            return None
        return {'Enabled': True, 'SSEType': 'KMS', 'KMSMasterKeyId': self.kms}

    def to_create_table_params(self, table_name: str) -> Dict[str, Any]:
        """Build the keyword arguments for a boto3 ``create_table`` call.

        Args:
            table_name: Physical DynamoDB table name

        Returns:
            CreateTable request parameters
        """
        params = {
            'TableName': table_name,
            'AttributeDefinitions': self.attribute_definitions(),
            'KeySchema': self.key_schema(),
            'BillingMode': self.billing_mode,
        }

        throughput = self.provisioned_throughput()
        if throughput is not None:
            params['ProvisionedThroughput'] = throughput

        sse = self.sse_specification()
        if sse is not None:
            params['SSESpecification'] = sse

        return params
