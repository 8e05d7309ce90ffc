# mongodb_path/repositories/sequence_repo.py
from __future__ import annotations

from typing import Optional

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from mongodb_path.db.init_db import SEQUENCE, collection_name
from mongodb_path.models.sequence import IdAllocation


class SequenceRepo:
    """
    Named monotonic counters, one document per sequence: {_id: name, value: int}.

    Every increment is a single findAndModify on that document, so concurrent
    callers on the same name never read the same value. Never split it into a
    read followed by a write.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection: Optional[str] = None):
        self.db = db
        self.col = db[collection_name(collection or SEQUENCE)]

    async def _increment(self, name: str, delta: int) -> int:
        doc = await self.col.find_one_and_update(
            {"_id": name},
            {"$inc": {"value": delta}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc["value"]) if doc else 0

    async def allocate(self, name: str, existing_max: int = 0) -> IdAllocation:
        """
        Issue the next value of `name`, guaranteed greater than `existing_max`.

        The first increment is best effort: a store error degrades the value to 0
        (logged, flagged on the result) instead of failing. The backfill increment
        that follows is correctness-critical and lets store errors propagate.
        """
        degraded = False
        try:
            value = await self._increment(name, 1)
        except PyMongoError as exc:
            logger.warning("Sequence {!r}: increment failed, degrading to 0: {}", name, exc)
            value = 0
            degraded = True

        delta = existing_max - value + 1
        if delta <= 0:
            return IdAllocation(value=value, degraded=degraded)

        value = await self._increment(name, delta)
        logger.debug("Sequence {!r}: backfilled by {} to {}", name, delta, value)
        return IdAllocation(value=value, degraded=degraded, backfilled=True)

    async def next_id(self, name: str, existing_max: int = 0) -> int:
        allocation = await self.allocate(name, existing_max)
        return allocation.value

    async def current(self, name: str) -> int:
        doc = await self.col.find_one({"_id": name}, {"value": 1})
        return int(doc["value"]) if doc else 0
