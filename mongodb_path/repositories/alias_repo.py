# mongodb_path/repositories/alias_repo.py
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.results import UpdateResult

from mongodb_path.core.errors import StoreClearedError
from mongodb_path.core.settings import settings
from mongodb_path.db.init_db import URL_ALIAS, collection_name, ensure_alias_indexes
from mongodb_path.models.alias import PathAlias, filter_keys, normalize_alias

# Projection for reads handed back to callers: "first" is internal.
_PUBLIC_FIELDS = {"first": 0, "_id": 0}


class AliasStore:
    """
    Alias documents: {pid, source, alias, language, first}.

    pid is unique and is the only upsert key. `first` caches the first segment
    of `source` so the whitelist is a single distinct() call.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection: Optional[str] = None):
        self.db = db
        self.name = collection_name(collection or URL_ALIAS)
        self._col: Optional[AsyncIOMotorCollection] = db[self.name]

    @property
    def col(self) -> AsyncIOMotorCollection:
        if self._col is None:
            raise StoreClearedError(self.name)
        return self._col

    def _trace(self, op: str, *args: Any) -> None:
        if settings.MONGO_DEBUG:
            logger.debug("{}.{} {}", self.name, op, args)

    # ---------- Lifecycle ----------

    async def ensure_schema(self) -> None:
        """Create the alias indexes. Idempotent."""
        self._trace("ensure_schema")
        await ensure_alias_indexes(self.col)

    async def clear(self) -> None:
        """Drop the whole collection. The store is unusable until reopen()."""
        self._trace("clear")
        await self.col.drop()
        self._col = None
        logger.info("Dropped alias collection {}", self.name)

    def reopen(self) -> None:
        self._col = self.db[self.name]

    async def reset(self) -> None:
        """Drop and rebuild the collection; also recovers a store left cleared."""
        self.reopen()
        await self.clear()
        self.reopen()
        await self.ensure_schema()

    # ---------- Writes ----------

    async def save(self, path: Mapping[str, Any] | PathAlias) -> Tuple[Dict[str, Any], UpdateResult]:
        """
        Upsert `path` by pid and return (persisted document, write result).

        Unknown keys are dropped and `first` is derived from `source` when
        missing. A pid clash on a different _id surfaces as DuplicateKeyError.
        """
        record = normalize_alias(path)
        self._trace("save", record)
        result = await self.col.replace_one({"pid": record["pid"]}, dict(record), upsert=True)
        return record, result

    async def delete(self, criteria: Mapping[str, Any]) -> int:
        criteria = filter_keys(criteria)
        self._trace("delete", criteria)
        result = await self.col.delete_many(criteria)
        return result.deleted_count

    # ---------- Reads ----------

    async def load(self, conditions: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        self._trace("load", conditions)
        return await self.col.find_one(dict(conditions), _PUBLIC_FIELDS)

    async def get_whitelist(self) -> Dict[str, int]:
        """Distinct first segments as a presence map."""
        self._trace("get_whitelist")
        firsts = await self.col.distinct("first")
        return {first: 1 for first in firsts}

    async def count(self) -> int:
        return await self.col.count_documents({})

    async def max_pid(self) -> int:
        doc = await self.col.find_one({}, {"pid": 1}, sort=[("pid", -1)])
        return int(doc["pid"]) if doc else 0

    async def list_page(self, page: int, height: int) -> List[Dict[str, Any]]:
        """One page of aliases ordered by pid."""
        self._trace("list_page", page, height)
        cur = self.col.find({}, _PUBLIC_FIELDS).sort("pid", 1).skip(page * height).limit(height)
        return await cur.to_list(None)

    async def find_sorted(
        self,
        criteria: Mapping[str, Any],
        sort: List[Tuple[str, int]],
        projection: Optional[Mapping[str, Any]] = None,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """Run a read with an explicit sort; documents have no natural order."""
        self._trace("find", criteria, sort)
        fields = dict(projection) if projection is not None else {"source": 1, "alias": 1, "language": 1, "pid": 1, "_id": 0}
        cur = self.col.find(dict(criteria), fields).sort(sort)
        if limit:
            cur = cur.limit(limit)
        return await cur.to_list(None)
