"""
Exceptions raised by the bridge.

Fatal errors carry the process exit code the entry point should use; the
library itself never terminates the process.
"""


class BridgeError(Exception):
    """Base class for all bridge errors"""


class FatalBridgeError(BridgeError):
    """A condition that moves the bridge out of the serving state"""

    exit_code = 1


class BrokerConnectionError(FatalBridgeError):
    """Initial connection to the MQTT broker could not be established"""

    exit_code = 2


class SubscribeError(FatalBridgeError):
    """Subscribing to the sensor topic failed"""

    exit_code = 3


class StorageConnectionError(FatalBridgeError):
    """Initial connection to MongoDB could not be established"""

    exit_code = 4


class TransformError(BridgeError):
    """The transform service did not return a usable result for one payload"""
