"""
Generic MongoDB connection management.
Opens one client per process and hands out collection handles.
"""

from urllib.parse import quote_plus

import structlog
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = structlog.get_logger(__name__, component="mongodb")


def build_mongo_uri(
    host: str, port: int, user: str | None = None, password: str | None = None
) -> str:
    """Assemble a mongodb:// URI, escaping credentials when present"""
    if user:
        credentials = f"{quote_plus(user)}:{quote_plus(password or '')}@"
    else:
        credentials = ""
    return f"mongodb://{credentials}{host}:{port}"


class MongoConnection:
    """Base class for MongoDB connection management"""

    def __init__(
        self,
        uri: str,
        database: str,
        connect_timeout_seconds: float = 10.0,
        write_concern: str = "majority",
    ):
        self.uri = uri
        self.database_name = database
        self.connect_timeout_seconds = connect_timeout_seconds
        self.write_concern = write_concern
        self.client = None
        self.database = None
        self._connect()

    def _connect(self):
        """Establish connection to MongoDB and verify it with a ping"""
        timeout_ms = int(self.connect_timeout_seconds * 1000)
        try:
            self.client = MongoClient(
                self.uri,
                w=self.write_concern,
                connectTimeoutMS=timeout_ms,
                serverSelectionTimeoutMS=timeout_ms,
            )
            self.client.admin.command("ping")
            self.database = self.client[self.database_name]
            logger.info("MongoDB connection established", database=self.database_name)
        except PyMongoError as e:
            logger.error("Failed to connect to MongoDB", error=str(e))
            if self.client is not None:
                self.client.close()
                self.client = None
            raise

    def check_health(self) -> bool:
        """Check if database connection is healthy"""
        try:
            result = self.client.admin.command("ping")
            return result.get("ok") == 1
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return False

    def close(self):
        """Close database connection"""
        if self.client:
            self.client.close()
            self.client = None
            logger.info("MongoDB connection closed")
