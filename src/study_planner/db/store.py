"""Lifecycle-managed handle on the MongoDB document store."""

from __future__ import annotations

import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from ..core.config import Settings
from ..models import DOCUMENT_MODELS, TASK_COLLECTION, USER_COLLECTION

logger = logging.getLogger(__name__)


class StoreNotOpenError(RuntimeError):
    """Raised when the store is used before ``open()`` or after ``close()``."""


class DocumentStore:
    """Own a motor client and the database the document models are bound to.

    The store is created once per process, opened at startup and closed at
    shutdown. Services receive it explicitly rather than reaching for module
    globals.
    """

    def __init__(self, client: AsyncIOMotorClient, database_name: str) -> None:
        self._client = client
        self._database_name = database_name
        self._database: AsyncIOMotorDatabase | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        client = AsyncIOMotorClient(settings.mongo_url, tz_aware=True, uuidRepresentation="standard")
        return cls(client, settings.mongo_database)

    @property
    def is_open(self) -> bool:
        return self._database is not None

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise StoreNotOpenError("Document store has not been opened.")
        return self._database

    @property
    def tasks(self) -> AsyncIOMotorCollection:
        return self.database[TASK_COLLECTION]

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self.database[USER_COLLECTION]

    async def open(self) -> None:
        """Bind the document models and ensure their indexes exist."""

        if self._database is not None:
            return
        database = self._client[self._database_name]
        await init_beanie(database=database, document_models=list(DOCUMENT_MODELS))
        self._database = database
        logger.info("Document store opened", extra={"database": self._database_name})

    async def close(self) -> None:
        if self._database is None:
            return
        self._client.close()
        self._database = None
        logger.info("Document store closed", extra={"database": self._database_name})


__all__ = ["DocumentStore", "StoreNotOpenError"]
