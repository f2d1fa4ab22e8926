"""
Per-message handling policy: topic and payload in, one stored record (or none) out.
"""

import structlog

from .database import StorageSink
from .models import SensorRecord

logger = structlog.get_logger(__name__, component="mqtt")


class MessageHandler:
    """Turns inbound MQTT messages into sensor records and hands them to storage.

    Holds no per-message state and may be called from whichever thread the MQTT
    client delivers on. A failure drops the message; nothing is raised back to
    the caller.
    """

    def __init__(self, sink: StorageSink):
        self.sink = sink

    def handle(self, topic: str, payload: bytes) -> None:
        try:
            record = SensorRecord.from_message(topic, payload)
            logger.info("Received message", device_id=record.device_id, payload=record.payload)
            self.sink.store(record)
        except Exception as e:
            logger.error("Failed to handle message", topic=topic, error=str(e), exc_info=True)
