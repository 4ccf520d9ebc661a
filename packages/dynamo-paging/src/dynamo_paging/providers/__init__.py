"""Provider implementations for external services.

Each provider module exports a `Provider` class alias for the main provider class,
along with its credentials and params types.

Available providers (require optional dependencies):
- dynamodb: Amazon DynamoDB / DynamoDB Local via boto3
"""

from dynamo_paging.providers import dynamodb

__all__ = [
    "dynamodb",
]
