"""
Core utilities shared across the application.
"""

from .database import MongoConnection, build_mongo_uri
from .logger import setup_logging

__all__ = ["MongoConnection", "build_mongo_uri", "setup_logging"]
