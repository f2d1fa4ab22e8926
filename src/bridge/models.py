"""
Data models and configuration for the MQTT to MongoDB bridge.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from src.core.database import build_mongo_uri


def device_id_from_topic(topic: str) -> str:
    """Return the last segment of a topic; a topic without '/' is returned whole"""
    return topic.split("/")[-1]


@dataclass
class SensorRecord:
    """One received message, as persisted in MongoDB"""

    device_id: str
    payload: str
    timestamp: datetime

    @classmethod
    def from_message(cls, topic: str, payload: bytes, received_at: datetime | None = None):
        """Build a record from a raw MQTT message, stamped with receipt time"""
        return cls(
            device_id=device_id_from_topic(topic),
            payload=payload.decode("utf-8", errors="replace"),
            timestamp=received_at or datetime.now(timezone.utc),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "device_id": self.device_id,
            "payload": self.payload,
            "timestamp": self.timestamp,
        }


@dataclass
class BridgeConfig:
    """Configuration for the bridge process"""

    # MQTT settings
    mqtt_broker: str = "localhost"
    mqtt_port: int = 1883
    mqtt_topic_prefix: str = "mesh/data/"
    mqtt_username: str | None = None
    mqtt_password: str | None = field(default=None, repr=False)
    mqtt_client_id: str = "mqtt-orchestrator"
    mqtt_keepalive: int = 60
    mqtt_connect_timeout_seconds: float = 10.0

    # Transform service settings
    encryption_enabled: bool = False
    encrypt_api_url: str | None = None
    transform_timeout_seconds: float = 5.0

    # MongoDB settings
    mongo_host: str = "localhost"
    mongo_port: int = 27017
    mongo_user: str | None = None
    mongo_password: str | None = field(default=None, repr=False)
    mongo_database: str = "sensors"
    mongo_collection: str = "data"
    mongo_connect_timeout_seconds: float = 10.0
    mongo_insert_timeout_seconds: float = 5.0

    @property
    def subscription_topic(self) -> str:
        """Multi-level wildcard under the configured prefix"""
        return f"{self.mqtt_topic_prefix}#"

    @property
    def mongo_uri(self) -> str:
        return build_mongo_uri(
            self.mongo_host, self.mongo_port, self.mongo_user, self.mongo_password
        )
