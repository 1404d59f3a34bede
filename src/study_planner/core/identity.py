"""Caller identity handed to every task workflow."""

from __future__ import annotations

from dataclasses import dataclass

from beanie import PydanticObjectId


@dataclass(frozen=True, slots=True)
class AuthenticatedIdentity:
    """A verified caller, as asserted by a decoded access token.

    Workflows receive this value explicitly and never inspect request state.
    """

    user_id: PydanticObjectId

    def owns(self, owner_id: PydanticObjectId | None) -> bool:
        return owner_id is not None and owner_id == self.user_id


__all__ = ["AuthenticatedIdentity"]
