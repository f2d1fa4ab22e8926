"""
Sensor bridge that persists MQTT messages into MongoDB.
"""

import structlog

from .database import StorageSink
from .handler import MessageHandler
from .models import BridgeConfig
from .subscriber import SubscriptionManager
from .transform import TransformClient

logger = structlog.get_logger(__name__)


class SensorBridge:
    """Owns the shared MongoDB and MQTT handles and wires the message pipeline"""

    def __init__(self, config: BridgeConfig):
        self.config = config
        logger.info("Initializing sensor bridge", config=config)

        self.transformer = None
        if config.encryption_enabled:
            self.transformer = TransformClient(
                config.encrypt_api_url, timeout_seconds=config.transform_timeout_seconds
            )

        self.sink = StorageSink(config, transformer=self.transformer)
        self.handler = MessageHandler(self.sink)
        self.subscriber = SubscriptionManager(config, self.handler)

    def run(self, duration_seconds: int | None = None):
        """Connect to the broker and serve until a fatal error or the duration elapses

        Args:
            duration_seconds: Optional duration in seconds. If None, runs indefinitely.

        Raises:
            BrokerConnectionError, SubscribeError: the bridge cannot serve.
        """
        logger.info(
            "Starting sensor bridge",
            topic=self.config.subscription_topic,
            duration=duration_seconds if duration_seconds else "indefinite",
        )

        self.subscriber.connect()
        self.subscriber.wait(timeout=duration_seconds)

        logger.info("Duration limit reached", duration_seconds=duration_seconds)

    def close(self):
        """Release connections; in-flight messages are not drained"""
        self.subscriber.disconnect()
        if self.transformer is not None:
            self.transformer.close()
        self.sink.close()
        logger.info("Sensor bridge stopped")
