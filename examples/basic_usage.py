#!/usr/bin/env python3
"""
Basic usage example for dynamodb-tables.

Runs against DynamoDB Local on http://localhost:8000:

    docker run -p 8000:8000 amazon/dynamodb-local

1. Define a User table schema (nothing is created yet)
2. Write two users; the first write creates the table
3. Update one user with the update directive operators
4. Scan the table
"""

import logging

from dynamodb_tables import DynamoDBConfig, create_registry


def main():
    """Demonstrate lazy table creation and update directives."""
    logging.basicConfig(level=logging.INFO)

    # 1. Configure and define the schema
    print("1. Defining the User table...")
    tables = create_registry(DynamoDBConfig.for_local_development())
    users = tables.get_table('User')
    users.define({
        'attributes': {'username': {'type': 'S'}},
        'throughput': 5,
    })

    # 2. First write creates the table
    print("2. Writing users...")
    users.put({'username': 'bob', 'age': 42})
    users.put({'username': 'alice', 'age': 38, 'nickname': 'al'})

    # 3. Update directive: set, increment and remove
    print("3. Updating alice...")
    users.update(
        {'username': 'alice'},
        {'city': 'Lisbon', '$push': {'age': 1}, '$unset': {'nickname': True}},
    )

    # 4. Scan
    print("4. Scanning...")
    for item in users.scan():
        print(f"   {item}")


if __name__ == "__main__":
    main()
