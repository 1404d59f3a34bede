"""Document store helpers."""

from __future__ import annotations

from .store import DocumentStore, StoreNotOpenError

__all__ = ["DocumentStore", "StoreNotOpenError"]
