"""
MongoDB operations specific to the bridge.
Transforms (when enabled) and inserts one sensor record per message.
"""

import pymongo
import structlog
from pymongo.errors import PyMongoError

from src.core.database import MongoConnection

from .errors import StorageConnectionError, TransformError
from .models import BridgeConfig, SensorRecord
from .transform import TransformClient

logger = structlog.get_logger(__name__, component="mongodb")


class StorageSink(MongoConnection):
    """Write-only sink for sensor records with majority write concern"""

    def __init__(self, config: BridgeConfig, transformer: TransformClient | None = None):
        try:
            super().__init__(
                uri=config.mongo_uri,
                database=config.mongo_database,
                connect_timeout_seconds=config.mongo_connect_timeout_seconds,
            )
        except PyMongoError as e:
            raise StorageConnectionError(f"MongoDB connection error: {e}") from e

        self.collection = self.database[config.mongo_collection]
        self.insert_timeout_seconds = config.mongo_insert_timeout_seconds
        self.transformer = transformer
        logger.info(
            "Connected to collection",
            database=config.mongo_database,
            collection=config.mongo_collection,
            transform=transformer is not None,
        )

    def store(self, record: SensorRecord) -> bool:
        """Transform the payload if configured, then insert the record

        Returns True once the insert is acknowledged. Any failure is logged and
        the record is dropped without inserting.
        """
        if self.transformer is not None:
            try:
                record.payload = self.transformer.transform(record.payload)
            except TransformError as e:
                logger.error(
                    "Transform failed, message dropped", device_id=record.device_id, error=str(e)
                )
                return False

        try:
            with pymongo.timeout(self.insert_timeout_seconds):
                self.collection.insert_one(record.to_document())
        except PyMongoError as e:
            logger.error("Insert failed", device_id=record.device_id, error=str(e))
            return False

        logger.info("Data stored", device_id=record.device_id)
        return True
