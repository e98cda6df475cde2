"""
Request building helpers shared by table handles.

- Schema coercion (dict or TableSchema in, TableSchema out)
- Update directive translation into DynamoDB ``AttributeUpdates``
- Dropping unset optional parameters before they reach boto3
"""

from collections.abc import Mapping
from typing import Any, Dict, Union

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .models import TableSchema

PUSH = '$push'
POP = '$pop'
UNSET = '$unset'

UPDATE_OPERATORS = (PUSH, POP, UNSET)


def coerce_schema(schema: Union[TableSchema, Mapping]) -> TableSchema:
    """Return ``schema`` as a TableSchema, validating plain mappings.

    Raises:
        ValidationError: If the mapping does not describe a valid schema
    """
    if isinstance(schema, TableSchema):
        return schema
    try:
        return TableSchema.model_validate(schema)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid table schema: {e}", e.errors(), e) from e


def build_attribute_updates(directive: Mapping) -> Dict[str, Dict[str, Any]]:
    """Translate an update directive into DynamoDB ``AttributeUpdates``.

    Plain keys are set (``PUT``), ``$push`` entries are added (``ADD``),
    ``$pop`` entries are removed by value (``DELETE`` with a value) and
    ``$unset`` entries drop the attribute (``DELETE`` without a value).
    Categories are applied in that order, so a later one wins when the same
    attribute appears twice.

    The operator keys are always operators: an attribute literally named
    ``$push``, ``$pop`` or ``$unset`` cannot be set through a directive.

    Args:
        directive: Plain attribute values plus optional operator mappings

    Returns:
        AttributeUpdates mapping for UpdateItem

    Example:
        >>> build_attribute_updates({'a': 1, '$push': {'b': 2}, '$unset': {'d': True}})
        {'a': {'Action': 'PUT', 'Value': 1}, 'b': {'Action': 'ADD', 'Value': 2}, 'd': {'Action': 'DELETE'}}
    """
    for operator in UPDATE_OPERATORS:
        value = directive.get(operator)
        if value is not None and not isinstance(value, Mapping):
            raise ValidationError(
                f"{operator} expects a mapping of attribute names, got {type(value).__name__}"
            )

    updates: Dict[str, Dict[str, Any]] = {}

    for name, value in directive.items():
        if name not in UPDATE_OPERATORS:
            updates[name] = {'Action': 'PUT', 'Value': value}

    for name, value in (directive.get(PUSH) or {}).items():
        updates[name] = {'Action': 'ADD', 'Value': value}

    for name, value in (directive.get(POP) or {}).items():
        updates[name] = {'Action': 'DELETE', 'Value': value}

    for name in (directive.get(UNSET) or {}):
        updates[name] = {'Action': 'DELETE'}

    return updates


def compact_params(**params: Any) -> Dict[str, Any]:
    """Drop parameters left at None; boto3 rejects explicit nulls."""
    return {key: value for key, value in params.items() if value is not None}
