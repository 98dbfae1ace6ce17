from __future__ import annotations

from typing import Any

from pymongo import DESCENDING

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


class LeadRepository:
    """Thin async data access over the leads collection."""

    def __init__(self, collection: Any):
        self._collection = collection

    async def insert(self, document: dict[str, Any]) -> str:
        result = await self._collection.insert_one(dict(document))
        return str(result.inserted_id)

    async def list_newest_first(self) -> list[dict[str, Any]]:
        cursor = self._collection.find({}).sort(NEWEST_FIRST)
        return await cursor.to_list(length=None)

    async def count(self) -> int:
        return await self._collection.count_documents({})
