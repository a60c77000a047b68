from motor.motor_asyncio import AsyncIOMotorCollection
from typing import Optional
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError
from qaskills.base.models import User, utc_now

NO_ID = {"_id": 0}

class UserRepository:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def _create_user(self, user: User) -> Optional[User]:
        """Insert a new user. Returns None when the user already exists."""
        try:
            await self.collection.insert_one(user.model_dump())
        except DuplicateKeyError:
            return None
        return user

    async def _get_user_by_id(self, user_id: str) -> Optional[User]:
        """Retrieve a user by internal id."""
        user_data = await self.collection.find_one({"id": user_id}, NO_ID)
        if user_data:
            return User(**user_data)
        return None

    async def _get_user_by_clerk_id(self, clerk_id: str) -> Optional[User]:
        """Retrieve a user by identity provider id."""
        user_data = await self.collection.find_one({"clerkId": clerk_id}, NO_ID)
        if user_data:
            return User(**user_data)
        return None

    async def _get_users_by_ids(self, user_ids: list[str]) -> list[User]:
        cursor = self.collection.find({"id": {"$in": user_ids}}, NO_ID)
        return [User(**doc) async for doc in cursor]

    async def _update_user_by_clerk_id(self, clerk_id: str, update_data: dict) -> Optional[User]:
        """Update user details by identity provider id."""
        update_data["updatedAt"] = utc_now()
        user_data = await self.collection.find_one_and_update(
            {"clerkId": clerk_id},
            {"$set": update_data},
            projection=NO_ID,
            return_document=ReturnDocument.AFTER,
        )
        if user_data:
            return User(**user_data)
        return None

    async def _list_user_refs(self) -> list[dict]:
        """Username and last update of every user, for the sitemap."""
        cursor = self.collection.find({}, {"_id": 0, "username": 1, "updatedAt": 1})
        return [doc async for doc in cursor]
