"""
Sensor Bridge - MQTT to MongoDB ingestion.
"""

from .consumer import SensorBridge
from .database import StorageSink
from .handler import MessageHandler
from .models import BridgeConfig, SensorRecord, device_id_from_topic
from .subscriber import SubscriptionManager
from .transform import TransformClient

__all__ = [
    "BridgeConfig",
    "MessageHandler",
    "SensorBridge",
    "SensorRecord",
    "StorageSink",
    "SubscriptionManager",
    "TransformClient",
    "device_id_from_topic",
]
