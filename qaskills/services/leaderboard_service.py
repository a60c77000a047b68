from datetime import datetime, timezone
from typing import Optional
from qaskills.base.models import LeaderboardFilter
from qaskills.clients.cache_client import CacheClient
from qaskills.repositories.skill_repository import SkillRepository

LEADERBOARD_LIMIT = 50
LEADERBOARD_TTL_SECONDS = 300

class LeaderboardService:
    def __init__(self, skills: SkillRepository, cache: CacheClient):
        self.skills = skills
        self.cache = cache

    async def get_leaderboard(self, filter_name: Optional[str] = None) -> dict:
        """Ranked skills for the filter, cached for five minutes per filter."""
        leaderboard_filter = LeaderboardFilter.parse(filter_name)

        async def build() -> dict:
            rows = await self.skills._top_skills(leaderboard_filter, LEADERBOARD_LIMIT)
            return {
                "skills": [_leaderboard_row(rank, row) for rank, row in enumerate(rows, start=1)],
                "filter": leaderboard_filter.value,
                "updatedAt": datetime.now(timezone.utc).isoformat(),
            }

        return await self.cache.get_or_set(
            f"leaderboard:{leaderboard_filter.value}", build, LEADERBOARD_TTL_SECONDS,
        )


def _leaderboard_row(rank: int, row: dict) -> dict:
    return {
        "rank": rank,
        "id": row.get("id"),
        "name": row.get("name"),
        "slug": row.get("slug"),
        "author": row.get("authorName"),
        "installCount": row.get("installCount", 0),
        "weeklyInstalls": row.get("weeklyInstalls", 0),
        "qualityScore": row.get("qualityScore", 0),
        "testingTypes": row.get("testingTypes", []),
        "frameworks": row.get("frameworks", []),
        "verified": row.get("verified", False),
    }


def new_leaderboard_service(skills: SkillRepository, cache: CacheClient) -> LeaderboardService:
    return LeaderboardService(skills, cache)
