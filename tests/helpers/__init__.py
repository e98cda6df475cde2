"""Shared helpers for dynamodb-tables tests."""

from botocore.exceptions import ClientError


def create_client_error(error_code: str, message: str = "Test error", operation: str = "TestOperation") -> ClientError:
    """Helper to create ClientError for testing."""
    return ClientError(
        error_response={
            'Error': {
                'Code': error_code,
                'Message': message
            }
        },
        operation_name=operation
    )


def not_found_error(operation: str = "TestOperation") -> ClientError:
    return create_client_error('ResourceNotFoundException', 'Requested resource not found', operation)
