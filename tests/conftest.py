"""
Pytest configuration and shared fixtures.
"""

import dataclasses
from unittest.mock import MagicMock, patch

import pytest

from src.bridge.models import BridgeConfig


@pytest.fixture
def bridge_config():
    """Basic bridge configuration for testing."""
    return BridgeConfig(
        mqtt_broker="localhost",
        mqtt_port=1883,
        mqtt_topic_prefix="mesh/data/",
        mqtt_connect_timeout_seconds=0.1,
        mongo_host="localhost",
        mongo_port=27017,
        mongo_user="test_user",
        mongo_password="test_password",
        mongo_database="test_db",
        mongo_collection="test_collection",
    )


@pytest.fixture
def encryption_config(bridge_config):
    """Bridge configuration with payload encryption enabled."""
    return dataclasses.replace(
        bridge_config, encryption_enabled=True, encrypt_api_url="http://cipher:8000/"
    )


@pytest.fixture
def mock_mongo_client():
    """Patch MongoClient with a client whose ping succeeds."""
    with patch("src.core.database.MongoClient") as mock_client_class:
        mock_client = MagicMock()
        mock_client.admin.command.return_value = {"ok": 1.0}
        mock_client_class.return_value = mock_client
        yield mock_client_class


@pytest.fixture
def mock_session():
    """Patch requests.Session used by the transform client."""
    with patch("src.bridge.transform.requests.Session") as mock_session_class:
        yield mock_session_class.return_value


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses."""

    def _make(status_code=200, body=None, json_error=None):
        response = MagicMock()
        response.status_code = status_code
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = body
        return response

    return _make
