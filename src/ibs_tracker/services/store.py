"""Local key-value storage using TinyDB."""

import logging
import time
from pathlib import Path
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from pydantic import TypeAdapter, ValidationError
from tinydb import Query, TinyDB

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class KeyValueStore:
    """
    Key-value storage backed by a TinyDB JSON file.

    Every write is flushed to disk before returning. A corrupt file is moved
    aside and replaced with an empty store.
    """

    TABLE = "store"

    def __init__(self, path: Path):
        self.path = Path(path)
        self._db: Optional[TinyDB] = None

    @property
    def db(self) -> TinyDB:
        """Get the TinyDB instance."""
        if self._db is None:
            self._db = self._open()
        return self._db

    def _open(self) -> TinyDB:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        db = TinyDB(self.path, indent=2, ensure_ascii=False)

        try:
            data = db.storage.read()
        except ValueError:
            data = _MISSING

        if data is None or self._is_valid(data):
            return db

        db.close()
        backup = self.path.with_name(f"{self.path.stem}.corrupt-{int(time.time())}.json")
        self.path.replace(backup)
        logger.warning(
            "Store file %s could not be read; moved it to %s and starting empty",
            self.path,
            backup.name,
        )
        return TinyDB(self.path, indent=2, ensure_ascii=False)

    @classmethod
    def _is_valid(cls, data: Any) -> bool:
        """Whether file contents have the shape TinyDB can load."""
        if not isinstance(data, dict):
            return False
        table = data.get(cls.TABLE, {})
        if not isinstance(table, dict):
            return False
        # TinyDB turns document ids back into ints
        return all(
            str(doc_id).isdigit() and isinstance(doc, dict)
            for doc_id, doc in table.items()
        )

    def read(self, key: str, default: Any = None) -> Any:
        """Get the raw value stored under a key."""
        Item = Query()
        doc = self.db.table(self.TABLE).get(Item.key == key)
        if doc is None:
            return default
        if "value" not in doc:
            logger.warning("Stored document for %r has no value; using default", key)
            return default
        return doc["value"]

    def write(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under a key."""
        Item = Query()
        self.db.table(self.TABLE).upsert({"key": key, "value": value}, Item.key == key)

    def remove(self, key: str) -> bool:
        """Delete a key. Returns whether it existed."""
        Item = Query()
        removed = self.db.table(self.TABLE).remove(Item.key == key)
        return len(removed) > 0

    def close(self) -> None:
        """Close the database connection."""
        if self._db:
            self._db.close()
            self._db = None

    def __enter__(self) -> "KeyValueStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class PersistedValue(Generic[T]):
    """
    A value mirrored in memory and written through to a KeyValueStore.

    On creation the stored value is validated with `adapter`; a missing value
    yields `default`, an invalid one is logged and also yields `default`.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        default: T,
        adapter: Optional[TypeAdapter] = None,
    ):
        self.store = store
        self.key = key
        self.default = default
        self._adapter = adapter
        self._value: T = self._load()

    def _load(self) -> T:
        raw = self.store.read(self.key, _MISSING)
        if raw is _MISSING:
            return self.default
        if self._adapter is None:
            return raw

        try:
            return self._adapter.validate_python(raw)
        except ValidationError as exc:
            logger.warning(
                "Stored value for %r is invalid (%d errors); using default",
                self.key,
                exc.error_count(),
            )
            return self.default

    def _dump(self, value: T) -> Any:
        if self._adapter is None:
            return value
        return self._adapter.dump_python(value, mode="json", by_alias=True, exclude_none=True)

    @property
    def value(self) -> T:
        return self._value

    def reload(self) -> T:
        """Re-read the stored value, picking up writes from other processes."""
        self._value = self._load()
        return self._value

    def set(self, value: Union[T, Callable[[T], T]]) -> None:
        """Replace the value, or derive it from the previous one with a callable."""
        if callable(value):
            value = value(self._value)
        self._value = value
        self.store.write(self.key, self._dump(value))
