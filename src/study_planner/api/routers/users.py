"""Public user listings."""

from __future__ import annotations

from fastapi import APIRouter

from ...deps import SettingsDependency, StoreDependency
from ...schemas import LeaderboardEntry
from ...services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/leaderboard",
    response_model=list[LeaderboardEntry],
    summary="Top users ranked by XP",
)
async def read_leaderboard(
    store: StoreDependency,
    settings: SettingsDependency,
) -> list[LeaderboardEntry]:
    users = await UserService(store).leaderboard(settings.leaderboard_size)
    return [LeaderboardEntry.model_validate(user) for user in users]
