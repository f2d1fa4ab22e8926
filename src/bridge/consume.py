"""
Sensor Bridge - CLI Entry Point
Subscribes to sensor topics over MQTT and stores every message in MongoDB
"""

import argparse
import logging
import os
import sys

import structlog

from src.bridge.consumer import SensorBridge
from src.bridge.errors import FatalBridgeError
from src.bridge.models import BridgeConfig
from src.core.logger import setup_logging

logger = structlog.get_logger(__name__)


def parse_arguments(argv=None):
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        description="Sensor bridge for MQTT → MongoDB ingestion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
        Examples:
        # Basic usage with defaults
        python -m src.bridge.consume

        # Custom broker and MongoDB settings
        python -m src.bridge.consume --mqtt-broker mosquitto --mongo-host mongo

        # Encrypt payloads before storing them
        python -m src.bridge.consume --encryption --encrypt-api-url http://cipher:8000/

        # Using environment variables
        export MQTT_BROKER=mosquitto
        export MONGO_HOST=mongo
        python -m src.bridge.consume
        """,
    )

    # MQTT settings
    parser.add_argument(
        "--mqtt-broker",
        default=os.getenv("MQTT_BROKER", "localhost"),
        help="MQTT broker host (default: localhost or MQTT_BROKER env var)",
    )
    parser.add_argument(
        "--mqtt-port",
        type=int,
        default=int(os.getenv("MQTT_PORT") or "1883"),
        help="MQTT broker port (default: 1883 or MQTT_PORT env var)",
    )
    parser.add_argument(
        "--topic-prefix",
        default=os.getenv("MQTT_TOPIC") or "mesh/data/",
        help="Topic prefix, '#' is appended (default: mesh/data/ or MQTT_TOPIC env var)",
    )
    parser.add_argument(
        "--mqtt-username",
        default=os.getenv("MQTT_USERNAME") or None,
        help="MQTT username (default: MQTT_USERNAME env var)",
    )
    parser.add_argument(
        "--mqtt-password",
        default=os.getenv("MQTT_PASSWORD") or None,
        help="MQTT password (default: MQTT_PASSWORD env var)",
    )
    parser.add_argument(
        "--client-id",
        default=os.getenv("MQTT_CLIENT_ID", "mqtt-orchestrator"),
        help="MQTT client ID (default: mqtt-orchestrator or MQTT_CLIENT_ID env var)",
    )

    # Transform service settings
    parser.add_argument(
        "--encryption",
        action=argparse.BooleanOptionalAction,
        default=os.getenv("ENCRYPTION", "").lower() == "true",
        help="Encrypt payloads through the cipher API before storing (default: ENCRYPTION env var)",
    )
    parser.add_argument(
        "--encrypt-api-url",
        default=os.getenv("ENCRYPT_API_URL") or None,
        help="Cipher API base URL, 'encrypt' is appended (default: ENCRYPT_API_URL env var)",
    )

    # MongoDB settings
    parser.add_argument(
        "--mongo-host",
        default=os.getenv("MONGO_HOST", "localhost"),
        help="MongoDB host (default: localhost or MONGO_HOST env var)",
    )
    parser.add_argument(
        "--mongo-port",
        type=int,
        default=int(os.getenv("MONGO_PORT") or "27017"),
        help="MongoDB port (default: 27017 or MONGO_PORT env var)",
    )
    parser.add_argument(
        "--mongo-user",
        default=os.getenv("MONGO_USER") or None,
        help="MongoDB user (default: MONGO_USER env var)",
    )
    parser.add_argument(
        "--mongo-password",
        default=os.getenv("MONGO_PASS") or None,
        help="MongoDB password (default: MONGO_PASS env var)",
    )
    parser.add_argument(
        "--mongo-db",
        default=os.getenv("MONGO_DATABASE", "sensors"),
        help="MongoDB database (default: sensors or MONGO_DATABASE env var)",
    )
    parser.add_argument(
        "--mongo-collection",
        default=os.getenv("MONGO_COLLECTION", "data"),
        help="MongoDB collection (default: data or MONGO_COLLECTION env var)",
    )

    # Runtime settings
    parser.add_argument(
        "--duration",
        type=int,
        help="Duration to run in seconds (default: infinite)",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level (default: INFO or LOG_LEVEL env var)",
    )

    return parser.parse_args(argv)


def build_config_from_args(args) -> BridgeConfig:
    """Build a BridgeConfig from command-line arguments"""
    config = BridgeConfig(
        mqtt_broker=args.mqtt_broker,
        mqtt_port=args.mqtt_port,
        mqtt_topic_prefix=args.topic_prefix,
        mqtt_username=args.mqtt_username,
        mqtt_password=args.mqtt_password,
        mqtt_client_id=args.client_id,
        encryption_enabled=args.encryption,
        encrypt_api_url=args.encrypt_api_url,
        mongo_host=args.mongo_host,
        mongo_port=args.mongo_port,
        mongo_user=args.mongo_user,
        mongo_password=args.mongo_password,
        mongo_database=args.mongo_db,
        mongo_collection=args.mongo_collection,
    )

    logger.info("Configuration built from arguments", config=config)
    return config


def main(argv=None):
    """Main entry point"""
    args = parse_arguments(argv)

    # Setup logging
    log_level = getattr(logging, args.log_level)
    setup_logging(level=log_level)

    logger.info("Starting sensor bridge")

    bridge = None
    try:
        config = build_config_from_args(args)

        bridge = SensorBridge(config)
        bridge.run(duration_seconds=args.duration)
        return 0

    except FatalBridgeError as e:
        logger.error("Fatal error", error=str(e), exit_code=e.exit_code)
        return e.exit_code

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0

    except Exception as e:
        logger.error("Bridge failed", error=str(e), exc_info=True)
        return 1

    finally:
        if bridge is not None:
            bridge.close()


if __name__ == "__main__":
    sys.exit(main())
