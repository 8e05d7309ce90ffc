# Defines logical collection names, maps them to physical (prefixed) names, and creates the alias indexes.

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

from mongodb_path.core.settings import settings

# --- Path aliases ---
URL_ALIAS = settings.ALIAS_COLLECTION

# --- Sequences (one doc per sequence name: {_id: name, value: int}) ---
SEQUENCE = settings.SEQUENCE_COLLECTION


def collection_name(name: str) -> str:
    """Physical name for a logical collection, honoring COLLECTION_PREFIX."""
    return f"{settings.COLLECTION_PREFIX}{name}"


async def ensure_alias_indexes(col: AsyncIOMotorCollection) -> None:
    # Just an accelerator for the whitelist, no need to wait on it.
    await col.create_index("first", background=True)

    # Structural: must be valid before any write to guarantee uniqueness,
    # so never built in the background.
    await col.create_index("pid", unique=True, background=False)

    # Sorted range scans for alias -> source and source -> alias lookups
    await col.create_index(
        [("alias", 1), ("language", 1), ("pid", 1)],
        unique=False,
        background=False,
    )
    await col.create_index(
        [("source", 1), ("language", 1), ("pid", 1)],
        unique=False,
        background=False,
    )


async def ensure_collections(db: AsyncIOMotorDatabase) -> None:
    # Alias storage
    await ensure_alias_indexes(db[collection_name(URL_ALIAS)])
    # Sequences are addressed by _id only: nothing to index.
    logger.info("Ensured collections for prefix {!r}", settings.COLLECTION_PREFIX)


async def drop_prefixed_collections(db: AsyncIOMotorDatabase, prefix: str) -> list[str]:
    """Drop every collection whose name starts with `prefix`; return the dropped names.

    Used to clean up after an isolated (prefixed) run. An empty prefix is refused
    since it would match every collection in the database.
    """
    if not prefix:
        raise ValueError("Refusing to drop collections with an empty prefix")
    dropped: list[str] = []
    for name in await db.list_collection_names():
        if name.startswith(prefix):
            await db.drop_collection(name)
            dropped.append(name)
    if dropped:
        logger.info("Dropped {} collection(s) with prefix {!r}", len(dropped), prefix)
    return dropped
