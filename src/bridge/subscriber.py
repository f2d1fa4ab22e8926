"""
MQTT subscription lifecycle: connect, (re)subscribe on every session, dispatch messages.
"""

import threading

import paho.mqtt.client as mqtt
import structlog

from .errors import BrokerConnectionError, FatalBridgeError, SubscribeError
from .handler import MessageHandler
from .models import BridgeConfig

logger = structlog.get_logger(__name__, component="mqtt")

QOS_AT_MOST_ONCE = 0


class SubscriptionManager:
    """Owns the MQTT client and keeps the sensor topic subscribed"""

    def __init__(self, config: BridgeConfig, handler: MessageHandler):
        self.config = config
        self.handler = handler
        self.topic = config.subscription_topic
        self.client: mqtt.Client | None = None

        self._connack = threading.Event()
        self._connect_error: str | None = None
        self._failed = threading.Event()
        self._fatal_error: FatalBridgeError | None = None

    def connect(self) -> mqtt.Client:
        """Open a clean session and wait for the broker to accept it

        Raises:
            BrokerConnectionError: the socket could not be opened, the broker
                refused the session, or no CONNACK arrived in time.
        """
        self.client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=self.config.mqtt_client_id,
            clean_session=True,
            protocol=mqtt.MQTTv311,
        )
        if self.config.mqtt_username:
            self.client.username_pw_set(self.config.mqtt_username, self.config.mqtt_password)

        self.client.on_connect = self._on_connect
        self.client.on_subscribe = self._on_subscribe
        self.client.on_disconnect = self._on_disconnect
        self.client.on_message = self._on_message

        logger.info(
            "Connecting to broker", host=self.config.mqtt_broker, port=self.config.mqtt_port
        )
        try:
            self.client.connect(
                self.config.mqtt_broker, self.config.mqtt_port, keepalive=self.config.mqtt_keepalive
            )
        except (OSError, ValueError) as e:
            logger.error("Connection failed", error=str(e))
            raise BrokerConnectionError(f"MQTT connection failed: {e}") from e

        self.client.loop_start()

        if not self._connack.wait(self.config.mqtt_connect_timeout_seconds):
            self.disconnect()
            raise BrokerConnectionError(
                f"MQTT connection timed out after {self.config.mqtt_connect_timeout_seconds}s"
            )
        if self._connect_error is not None:
            self.disconnect()
            raise BrokerConnectionError(f"MQTT connection refused: {self._connect_error}")

        return self.client

    def dispatch(self, topic: str, payload: bytes) -> None:
        self.handler.handle(topic, payload)

    def wait(self, timeout: float | None = None) -> None:
        """Block until a fatal error is recorded or the timeout elapses"""
        if self._failed.wait(timeout):
            raise self._fatal_error

    def disconnect(self):
        if self.client is not None:
            self.client.loop_stop()
            self.client.disconnect()
            logger.info("Disconnected from broker")

    def _fail(self, error: FatalBridgeError):
        logger.error("Fatal MQTT error", error=str(error))
        self._fatal_error = error
        self._failed.set()

    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        if reason_code.is_failure:
            logger.error("Connection refused by broker", reason=str(reason_code))
            if not self._connack.is_set():
                self._connect_error = str(reason_code)
                self._connack.set()
            return

        logger.info("Connected to broker")
        result, _mid = client.subscribe(self.topic, qos=QOS_AT_MOST_ONCE)
        if result != mqtt.MQTT_ERR_SUCCESS:
            self._fail(SubscribeError(f"Subscribe error: {mqtt.error_string(result)}"))
        else:
            logger.info("Subscribing", topic=self.topic, qos=QOS_AT_MOST_ONCE)
        self._connack.set()

    def _on_subscribe(self, client, userdata, mid, reason_code_list, properties=None):
        failures = [str(rc) for rc in reason_code_list if rc.is_failure]
        if failures:
            self._fail(SubscribeError(f"Subscribe error: {', '.join(failures)}"))
            return
        logger.info("Subscribed", topic=self.topic)

    def _on_disconnect(self, client, userdata, disconnect_flags, reason_code, properties=None):
        logger.warning("Disconnected from broker", reason=str(reason_code))

    def _on_message(self, client, userdata, message):
        self.dispatch(message.topic, message.payload)
