"""DynamoDB session store for production deployments."""

from __future__ import annotations

import json
from typing import Any

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import StoreError


class DynamoDBStore:
    """Session store using AWS DynamoDB.

    Table schema:
        Partition key: session_id (S)
        Attributes: record (S, JSON-encoded), ttl (N)

    ``ttl`` is only written for records with an ``expires`` instant. Enable
    TTL on the `ttl` attribute so DynamoDB reaps expired sessions.
    """

    def __init__(
        self,
        table_name: str = "sessions",
        endpoint_url: str = "",
        region_name: str = "us-west-2",
    ) -> None:
        self._table_name = table_name
        self._session = aioboto3.Session()
        self._endpoint_url = endpoint_url or None
        self._region_name = region_name

    def _resource(self):
        return self._session.resource(
            "dynamodb",
            endpoint_url=self._endpoint_url,
            region_name=self._region_name,
        )

    async def get(self, session_id: str) -> dict[str, Any] | None:
        try:
            async with self._resource() as dynamodb:
                table = await dynamodb.Table(self._table_name)
                response = await table.get_item(Key={"session_id": session_id})
        except (BotoCoreError, ClientError) as e:
            raise StoreError("get", session_id, str(e)) from e

        item = response.get("Item")
        if item is None:
            return None
        return json.loads(item["record"])

    async def set(self, session_id: str, record: dict[str, Any]) -> None:
        item: dict[str, Any] = {
            "session_id": session_id,
            "record": json.dumps(record),
        }
        if record.get("expires") is not None:
            item["ttl"] = int(record["expires"])
        try:
            async with self._resource() as dynamodb:
                table = await dynamodb.Table(self._table_name)
                await table.put_item(Item=item)
        except (BotoCoreError, ClientError) as e:
            raise StoreError("set", session_id, str(e)) from e

    async def destroy(self, session_id: str) -> None:
        try:
            async with self._resource() as dynamodb:
                table = await dynamodb.Table(self._table_name)
                await table.delete_item(Key={"session_id": session_id})
        except (BotoCoreError, ClientError) as e:
            raise StoreError("destroy", session_id, str(e)) from e
