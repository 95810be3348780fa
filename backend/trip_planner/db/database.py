"""
MongoDB Database Configuration and Connection
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING
from pymongo.server_api import ServerApi


class Database:
    """
    Handle on the MongoDB database.
    Opened in the application lifespan and closed on shutdown.
    """

    def __init__(self, uri: str | None, name: str, client: AsyncIOMotorClient | None = None):
        if client is None:
            if not uri:
                raise ValueError("MONGODB_URI environment variable is not set")
            # Create MongoDB client with server API version
            client = AsyncIOMotorClient(uri, server_api=ServerApi("1"))
        self._client = client
        self._database = client[name]
        self.name = name
        print(f"✅ Connected to MongoDB database: {name}")

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self._database.users

    @property
    def trips(self) -> AsyncIOMotorCollection:
        return self._database.trips

    async def init_indexes(self) -> None:
        """
        Initialize database indexes.
        The unique username index backs the duplicate-account check.
        """
        try:
            await self.users.create_index("username", unique=True)
            await self.trips.create_index([("owner", ASCENDING), ("created_at", DESCENDING)], name="owner_created")
            print("✅ Database indexes created successfully")
        except Exception as e:
            print(f"⚠️  Index creation warning: {e}")

    async def test_connection(self) -> bool:
        try:
            await self._database.command("ping")
            print("✅ MongoDB connection successful!")
            return True
        except Exception as e:
            print(f"❌ MongoDB connection failed: {e}")
            return False

    def close(self) -> None:
        self._client.close()
        print("🔌 Closed MongoDB connection")
