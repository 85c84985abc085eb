"""
MongoDB service for decision tree storage and completion analytics
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from motor.motor_asyncio import AsyncIOMotorClient
from bson import ObjectId
from bson.errors import InvalidId
import logging

from ..config import settings
from ..models.completion import CompletionRecord
from ..models.tree import DecisionTreeRow

logger = logging.getLogger(__name__)


def _id_query(tree_id: str) -> Dict[str, Any]:
    try:
        return {"_id": ObjectId(tree_id)}
    except (InvalidId, TypeError):
        return {"_id": tree_id}


class MongoService:
    """Service for MongoDB operations"""

    def __init__(self):
        self.client: Optional[AsyncIOMotorClient] = None
        self.db = None

    async def connect(self):
        """Connect to MongoDB"""
        try:
            self.client = AsyncIOMotorClient(settings.mongodb_url)
            self.db = self.client[settings.mongodb_db_name]

            # Test connection
            await self.client.admin.command('ping')
            logger.info("Connected to MongoDB successfully")

        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def close(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")

    async def health_check(self) -> bool:
        """Check MongoDB connection health"""
        try:
            await self.client.admin.command('ping')
            return True
        except Exception:
            return False

    # Decision tree operations
    async def load_active_tree(self, scheme_id: str) -> Optional[DecisionTreeRow]:
        """Get the newest active decision tree for a scheme"""
        try:
            doc = await self.db[settings.trees_collection].find_one(
                {"scheme_id": scheme_id, "is_active": True},
                sort=[("version", -1)]
            )
            if doc:
                return DecisionTreeRow(**doc)
            return None
        except Exception as e:
            logger.error(f"Failed to load active tree for scheme {scheme_id}: {e}")
            raise

    async def get_tree(self, tree_id: str) -> Optional[DecisionTreeRow]:
        """Get a decision tree version by its ID"""
        try:
            doc = await self.db[settings.trees_collection].find_one(_id_query(tree_id))
            if doc:
                return DecisionTreeRow(**doc)
            return None
        except Exception as e:
            logger.error(f"Failed to get tree {tree_id}: {e}")
            raise

    async def get_scheme_name(self, scheme_id: str) -> Optional[str]:
        """Get a scheme's display name"""
        try:
            doc = await self.db.schemes.find_one({"scheme_id": scheme_id}, {"scheme_name": 1})
            if doc:
                return doc.get("scheme_name")
            return None
        except Exception as e:
            logger.error(f"Failed to get scheme name for {scheme_id}: {e}")
            return None

    # Analytics
    async def record_completion(self, record: CompletionRecord) -> bool:
        """Store an anonymous wizard completion; never raises"""
        try:
            data = record.model_dump(mode="json")
            data["completed_at"] = datetime.now(timezone.utc)
            await self.db[settings.completions_collection].insert_one(data)
            logger.info(f"Completion recorded for scheme {record.scheme_id}: {record.result_status.value}")
            return True
        except Exception as e:
            logger.error(f"Failed to record completion: {e}")
            return False


# Global MongoDB service instance
mongo_service = MongoService()
