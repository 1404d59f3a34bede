"""Base repository implementation over beanie documents."""

from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar

from beanie import Document, PydanticObjectId
from motor.motor_asyncio import AsyncIOMotorCollection

from ..db.store import DocumentStore

ModelType = TypeVar("ModelType", bound=Document)


class BaseRepository(Generic[ModelType]):
    """Provide shared persistence helpers for repositories."""

    def __init__(self, store: DocumentStore, model_type: type[ModelType]) -> None:
        self._store = store
        self._model_type = model_type

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """Raw collection, used for conditional single-document updates."""
        return self._store.database[self._model_type.get_settings().name]

    def _parse(self, raw: Mapping[str, Any] | None) -> ModelType | None:
        if raw is None:
            return None
        return self._model_type.model_validate(raw)

    async def get(self, entity_id: PydanticObjectId) -> ModelType | None:
        """Retrieve a document by its ``_id``."""
        return self._parse(await self.collection.find_one({"_id": entity_id}))

    async def add(self, instance: ModelType) -> ModelType:
        """Insert a new document and return it with its generated id."""
        await instance.insert()
        return instance

    async def delete(self, instance: ModelType) -> bool:
        """Delete a document, returning ``True`` iff a record was removed."""
        result = await self.collection.delete_one({"_id": instance.id})
        return result.deleted_count == 1
