import re
from motor.motor_asyncio import AsyncIOMotorCollection
from typing import Optional
from pymongo import DESCENDING
from qaskills.base.models import LeaderboardFilter, Skill

NO_ID = {"_id": 0}

LEADERBOARD_FIELDS = {
    "_id": 0,
    "id": 1,
    "name": 1,
    "slug": 1,
    "authorName": 1,
    "installCount": 1,
    "weeklyInstalls": 1,
    "qualityScore": 1,
    "testingTypes": 1,
    "frameworks": 1,
    "verified": 1,
}

SORTS = {
    LeaderboardFilter.All: [("installCount", DESCENDING)],
    LeaderboardFilter.Trending: [("weeklyInstalls", DESCENDING), ("createdAt", DESCENDING)],
    LeaderboardFilter.New: [("createdAt", DESCENDING)],
}

# Hot = 70% installs + 30% quality
HOT_SCORE = {"$add": [
    {"$multiply": ["$installCount", 0.7]},
    {"$multiply": ["$qualityScore", 0.3]},
]}

class SkillRepository:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def _top_skills(self, sort: LeaderboardFilter, limit: int = 50) -> list[dict]:
        """Leaderboard rows for the given ordering."""
        if sort == LeaderboardFilter.Hot:
            pipeline = [
                {"$addFields": {"hotScore": HOT_SCORE}},
                {"$sort": {"hotScore": -1}},
                {"$limit": limit},
                {"$project": LEADERBOARD_FIELDS},
            ]
            return await self.collection.aggregate(pipeline).to_list(length=limit)
        cursor = self.collection.find({}, LEADERBOARD_FIELDS).sort(SORTS[sort]).limit(limit)
        return await cursor.to_list(length=limit)

    async def _digest_skills(self, limit: int = 10) -> list[Skill]:
        cursor = (
            self.collection.find({}, NO_ID)
            .sort([("weeklyInstalls", DESCENDING), ("installCount", DESCENDING)])
            .limit(limit)
        )
        return [Skill(**doc) async for doc in cursor]

    async def _get_skill(self, author: str, slug: str) -> Optional[Skill]:
        data = await self.collection.find_one({"authorName": author, "slug": slug}, NO_ID)
        if data:
            return Skill(**data)
        return None

    async def _search_skills(self, query: Optional[str], limit: int) -> list[Skill]:
        criteria = {}
        if query:
            pattern = {"$regex": re.escape(query), "$options": "i"}
            criteria = {"$or": [{"name": pattern}, {"description": pattern}]}
        cursor = self.collection.find(criteria, NO_ID).sort([("installCount", DESCENDING)]).limit(limit)
        return [Skill(**doc) async for doc in cursor]

    async def _list_skill_refs(self) -> list[dict]:
        """Slug, author and last update of every skill, for the sitemap."""
        cursor = self.collection.find({}, {"_id": 0, "slug": 1, "authorName": 1, "updatedAt": 1})
        return [doc async for doc in cursor]
