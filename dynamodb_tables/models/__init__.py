from .schema import (
    AttributeType,
    BillingMode,
    KeyAttribute,
    KeyType,
    TableSchema,
    Throughput,
)

__all__ = [
    "AttributeType",
    "BillingMode",
    "KeyAttribute",
    "KeyType",
    "TableSchema",
    "Throughput",
]
