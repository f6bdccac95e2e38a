"""Shared fixtures for integration tests against a real DynamoDB endpoint.

All integration tests are skipped unless the required environment variables
are set. This allows the test suite to run in CI without a database while
supporting local testing against DynamoDB Local.

Required env vars:
    SESSION_DYNAMODB_ENDPOINT   e.g., http://localhost:8000

Optional env vars:
    SESSION_DYNAMODB_REGION     defaults to us-west-2
"""

from __future__ import annotations

import os
import uuid

import aioboto3
import pytest
import pytest_asyncio

from signed_session import DynamoDBStore

pytestmark = pytest.mark.integration


@pytest.fixture
def dynamodb_endpoint() -> str:
    endpoint = os.environ.get("SESSION_DYNAMODB_ENDPOINT")
    if not endpoint:
        pytest.skip("SESSION_DYNAMODB_ENDPOINT required")
    return endpoint


@pytest_asyncio.fixture
async def dynamodb_store(dynamodb_endpoint):
    """A DynamoDBStore over a throwaway table, dropped after the test."""
    region = os.environ.get("SESSION_DYNAMODB_REGION", "us-west-2")
    table_name = f"sessions_{uuid.uuid4().hex[:8]}"
    session = aioboto3.Session()

    async with session.resource("dynamodb", endpoint_url=dynamodb_endpoint, region_name=region) as dynamodb:
        table = await dynamodb.create_table(
            TableName=table_name,
            KeySchema=[{"AttributeName": "session_id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "session_id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        await table.wait_until_exists()

    yield DynamoDBStore(table_name=table_name, endpoint_url=dynamodb_endpoint, region_name=region)

    async with session.resource("dynamodb", endpoint_url=dynamodb_endpoint, region_name=region) as dynamodb:
        table = await dynamodb.Table(table_name)
        await table.delete()
