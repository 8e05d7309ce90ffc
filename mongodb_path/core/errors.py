class MongoPathError(Exception):
    """Base class for errors raised by mongodb_path itself (store errors stay pymongo's)."""


class StoreClearedError(MongoPathError):
    """An AliasStore was used after clear() without reopen()."""

    def __init__(self, collection: str):
        super().__init__(
            f"Alias collection '{collection}' was dropped; call reopen() or reset() before using the store again"
        )
        self.collection = collection
