"""
Collection-level access for trips and users
"""

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError

from trip_planner.models.trip import Trip, TripSummary
from trip_planner.models.user import User


class DuplicateUsernameError(Exception):
    """Raised when inserting a user whose username is already taken."""


def _object_id(value: str) -> ObjectId | None:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _with_id(doc: dict) -> dict:
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


class TripStore:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def insert(self, trip: Trip) -> str:
        result = await self.collection.insert_one(trip.to_document())
        return str(result.inserted_id)

    async def find(self, trip_id: str) -> Trip | None:
        oid = _object_id(trip_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid})
        if doc is None:
            return None
        return Trip.model_validate(_with_id(doc))

    async def find_by_owner(self, owner: str) -> list[TripSummary]:
        """Trips owned by `owner`, newest first, without itineraries."""
        cursor = self.collection.find({"owner": owner}, {"itinerary": 0}).sort("created_at", -1)
        docs = await cursor.to_list(length=None)
        return [TripSummary.model_validate(_with_id(doc)) for doc in docs]

    async def update_fields(self, trip_id: str, fields: dict[str, Any]) -> bool:
        """
        Set the given document fields. Returns False when the trip is gone.
        There is no version check, so concurrent writers race and the last one wins.
        """
        oid = _object_id(trip_id)
        if oid is None:
            return False
        result = await self.collection.update_one({"_id": oid}, {"$set": fields})
        return result.matched_count > 0

    async def delete(self, trip_id: str) -> bool:
        oid = _object_id(trip_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0


class UserStore:
    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    async def find_by_username(self, username: str) -> User | None:
        doc = await self.collection.find_one({"username": username})
        if doc is None:
            return None
        return User.model_validate(_with_id(doc))

    async def insert(self, user: User) -> str:
        try:
            result = await self.collection.insert_one(user.to_document())
        except DuplicateKeyError as e:
            raise DuplicateUsernameError(user.username) from e
        return str(result.inserted_id)
