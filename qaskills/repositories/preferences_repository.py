from motor.motor_asyncio import AsyncIOMotorCollection
from typing import Optional
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from qaskills.base.models import UserPreferences, utc_now

NO_ID = {"_id": 0}

class PreferencesRepository:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def _get_preferences(self, user_id: str) -> Optional[UserPreferences]:
        data = await self.collection.find_one({"userId": user_id}, NO_ID)
        if data:
            return UserPreferences(**data)
        return None

    async def _create_preferences(self, preferences: UserPreferences) -> Optional[UserPreferences]:
        """Insert a preferences row. Returns None if the user already has one."""
        try:
            await self.collection.insert_one(preferences.model_dump())
        except DuplicateKeyError:
            return None
        return preferences

    async def _update_preferences(self, user_id: str, update_data: dict) -> Optional[UserPreferences]:
        """Update an existing row. Returns None when the user has no preferences yet."""
        update_data["updatedAt"] = utc_now()
        data = await self.collection.find_one_and_update(
            {"userId": user_id},
            {"$set": update_data},
            projection=NO_ID,
            return_document=ReturnDocument.AFTER,
        )
        if data:
            return UserPreferences(**data)
        return None

    async def _disable_preferences(self, user_id: str, fields: list[str]) -> UserPreferences:
        """Switch the given flags off, creating the row with defaults on first write."""
        now = utc_now()
        update = {field: False for field in fields}
        update["updatedAt"] = now
        defaults = UserPreferences(userId=user_id, capturedAt=now, createdAt=now).model_dump()
        on_insert = {k: v for k, v in defaults.items() if k not in update}
        data = await self.collection.find_one_and_update(
            {"userId": user_id},
            {"$set": update, "$setOnInsert": on_insert},
            projection=NO_ID,
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return UserPreferences(**data)

    async def _subscriber_user_ids(self, *fields: str) -> list[str]:
        """Ids of users with every one of the given flags switched on."""
        cursor = self.collection.find({field: True for field in fields}, {"_id": 0, "userId": 1})
        return [doc["userId"] async for doc in cursor]
